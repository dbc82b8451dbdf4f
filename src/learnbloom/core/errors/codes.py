"""Error kinds, backend codes, and display tables.

This module provides:
- ErrorKind: The closed taxonomy every failure maps into
- BackendCode: Data-error codes returned by the hosted Postgres/PostgREST backend
- DEFAULT_MESSAGES: Default user-facing description per kind
- ERROR_TITLES: Toast/dialog title per kind

Error Kind Taxonomy
===================

    | Kind | Typical source | Title |
    |------|----------------|-------|
    | NETWORK_ERROR | offline, transport failure | 网络错误 |
    | API_ERROR | unlisted backend code, 429, other status | 错误 |
    | VALIDATION_ERROR | 23505, 23503, HTTP 400 | 输入错误 |
    | AUTHENTICATION_ERROR | HTTP 401 | 身份验证错误 |
    | AUTHORIZATION_ERROR | PGRST301, 42501, HTTP 403 | 权限错误 |
    | NOT_FOUND_ERROR | PGRST116, HTTP 404 | 资源不存在 |
    | SERVER_ERROR | HTTP 500/502/503/504 | 服务器错误 |
    | UNKNOWN_ERROR | anything else | 错误 |
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error kinds.

    Values are stable strings used in log records and by the presentation
    layer. Every failure maps to exactly one kind.
    """

    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class BackendCode:
    """Recognized backend data-error codes.

    PGRST* codes come from the REST layer; five-digit codes are Postgres
    SQLSTATE values passed through unchanged.
    """

    NO_ROWS = "PGRST116"
    INSUFFICIENT_PRIVILEGE = "PGRST301"
    DB_INSUFFICIENT_PRIVILEGE = "42501"
    UNIQUE_VIOLATION = "23505"
    FOREIGN_KEY_VIOLATION = "23503"


SERVER_ERROR_STATUSES: frozenset[int] = frozenset({500, 502, 503, 504})
"""HTTP statuses classified as SERVER_ERROR."""


DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK_ERROR: "网络连接失败，请检查网络设置",
    ErrorKind.API_ERROR: "API请求失败，请稍后重试",
    ErrorKind.VALIDATION_ERROR: "输入数据验证失败",
    ErrorKind.AUTHENTICATION_ERROR: "身份验证失败，请重新登录",
    ErrorKind.AUTHORIZATION_ERROR: "权限不足，无法执行此操作",
    ErrorKind.NOT_FOUND_ERROR: "请求的资源不存在",
    ErrorKind.SERVER_ERROR: "服务器内部错误，请稍后重试",
    ErrorKind.UNKNOWN_ERROR: "发生未知错误，请稍后重试",
}


GENERIC_TITLE = "错误"

ERROR_TITLES: dict[ErrorKind, str] = {
    ErrorKind.NETWORK_ERROR: "网络错误",
    ErrorKind.AUTHENTICATION_ERROR: "身份验证错误",
    ErrorKind.AUTHORIZATION_ERROR: "权限错误",
    ErrorKind.VALIDATION_ERROR: "输入错误",
    ErrorKind.NOT_FOUND_ERROR: "资源不存在",
    ErrorKind.SERVER_ERROR: "服务器错误",
    ErrorKind.API_ERROR: GENERIC_TITLE,
    ErrorKind.UNKNOWN_ERROR: GENERIC_TITLE,
}


def get_error_title(kind: ErrorKind) -> str:
    """Return the display title for an error kind."""
    return ERROR_TITLES.get(kind, GENERIC_TITLE)


__all__ = [
    "BackendCode",
    "DEFAULT_MESSAGES",
    "ERROR_TITLES",
    "ErrorKind",
    "GENERIC_TITLE",
    "SERVER_ERROR_STATUSES",
    "get_error_title",
]
