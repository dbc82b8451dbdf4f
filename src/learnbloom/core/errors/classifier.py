"""ErrorClassifier implementation.

Converts any caught failure into exactly one ClassifiedError. Classification
is pure apart from reading the connectivity signal, which callers may pass
explicitly.
"""

from __future__ import annotations

from typing import Any, Protocol

from learnbloom.core.logging import get_logger

from .codes import SERVER_ERROR_STATUSES, BackendCode, ErrorKind
from .models import (
    AppError,
    BackendDataError,
    ClassifiedError,
    HttpFailure,
    NetworkFailure,
    RawFailure,
)
from .parsers import to_raw_failure

_logger = get_logger("errors")


class ConnectivitySource(Protocol):  # pragma: no cover - structural protocol
    @property
    def is_online(self) -> bool: ...


# =============================================================================
# Classification tables
# =============================================================================

OFFLINE_MESSAGE = "网络连接已断开，请检查网络设置"
TRANSPORT_MESSAGE = "网络请求失败，请检查网络连接"
BACKEND_FALLBACK_MESSAGE = "数据库操作失败"
HTTP_FALLBACK_MESSAGE = "API请求失败"
UNKNOWN_FALLBACK_MESSAGE = "发生未知错误"

_BACKEND_CODE_MAP: dict[str, tuple[ErrorKind, int, str]] = {
    BackendCode.NO_ROWS: (ErrorKind.NOT_FOUND_ERROR, 404, "请求的数据不存在"),
    BackendCode.INSUFFICIENT_PRIVILEGE: (
        ErrorKind.AUTHORIZATION_ERROR, 403, "权限不足，无法访问此资源",
    ),
    BackendCode.DB_INSUFFICIENT_PRIVILEGE: (ErrorKind.AUTHORIZATION_ERROR, 403, "数据库权限不足"),
    BackendCode.UNIQUE_VIOLATION: (ErrorKind.VALIDATION_ERROR, 400, "数据已存在，请检查输入"),
    BackendCode.FOREIGN_KEY_VIOLATION: (
        ErrorKind.VALIDATION_ERROR, 400, "数据关联错误，请检查相关数据",
    ),
}

_HTTP_STATUS_MAP: dict[int, tuple[ErrorKind, str]] = {
    400: (ErrorKind.VALIDATION_ERROR, "请求参数错误"),
    401: (ErrorKind.AUTHENTICATION_ERROR, "身份验证失败，请重新登录"),
    403: (ErrorKind.AUTHORIZATION_ERROR, "权限不足，无法执行此操作"),
    404: (ErrorKind.NOT_FOUND_ERROR, "请求的资源不存在"),
    429: (ErrorKind.API_ERROR, "请求过于频繁，请稍后重试"),
}
_HTTP_STATUS_MAP.update(
    {status: (ErrorKind.SERVER_ERROR, "服务器错误，请稍后重试") for status in SERVER_ERROR_STATUSES}
)


# =============================================================================
# Error Classifier
# =============================================================================


class ErrorClassifier:
    """Classifies raw failures into the closed ErrorKind taxonomy.

    Priority order (first match wins):

    1. Offline connectivity -> NETWORK_ERROR, whatever the failure says
    2. Already-classified input (AppError / ClassifiedError) passes through
    3. Backend data-error code -> fixed code table, else API_ERROR (500)
    4. HTTP-like status -> fixed status table, else API_ERROR
    5. Transport failure markers -> NETWORK_ERROR
    6. Everything else -> UNKNOWN_ERROR
    """

    def __init__(self, connectivity: ConnectivitySource | None = None) -> None:
        """Initialize the classifier.

        Args:
            connectivity: Optional source of the online/offline signal,
                consulted when ``classify`` is not given ``online``. Without
                one the client is assumed to be online.
        """
        self.connectivity = connectivity

    def _resolve_online(self, online: bool | None) -> bool:
        if online is not None:
            return online
        if self.connectivity is None:
            return True
        try:
            return bool(self.connectivity.is_online)
        except Exception:
            _logger.warning("connectivity_signal_unreadable", exc_info=True)
            return True

    def classify(self, raw: Any, *, online: bool | None = None) -> ClassifiedError:
        """Classify a raw failure.

        Never raises: every input, including None, plain strings and empty
        mappings, produces exactly one ClassifiedError.

        Args:
            raw: The caught value, either a RawFailure variant or anything
                the caller caught.
            online: Explicit connectivity state. None means "ask the bound
                connectivity source".

        Returns:
            The ClassifiedError, with ``cause`` set to ``raw``.
        """
        if not self._resolve_online(online):
            result = ClassifiedError(
                kind=ErrorKind.NETWORK_ERROR,
                message=OFFLINE_MESSAGE,
                cause=raw,
            )
        elif isinstance(raw, AppError):
            result = raw.error
        elif isinstance(raw, ClassifiedError):
            result = raw
        else:
            result = self.classify_failure(to_raw_failure(raw), cause=raw)

        _logger.debug(
            "error_classified",
            kind=result.kind.value,
            status_code=result.status_code,
        )
        return result

    def classify_failure(self, failure: RawFailure, cause: Any = None) -> ClassifiedError:
        """Classify an already-coerced raw failure, ignoring connectivity.

        Args:
            failure: The raw failure variant.
            cause: Original value to retain; defaults to ``failure``.
        """
        if cause is None:
            cause = failure

        if isinstance(failure, BackendDataError):
            return self._classify_backend_code(failure, cause)
        if isinstance(failure, HttpFailure):
            return self._classify_status(failure, cause)
        if isinstance(failure, NetworkFailure):
            return ClassifiedError(
                kind=ErrorKind.NETWORK_ERROR,
                message=TRANSPORT_MESSAGE,
                cause=cause,
            )
        return ClassifiedError(
            kind=ErrorKind.UNKNOWN_ERROR,
            message=failure.message or UNKNOWN_FALLBACK_MESSAGE,
            cause=cause,
        )

    def _classify_backend_code(self, failure: BackendDataError, cause: Any) -> ClassifiedError:
        mapped = _BACKEND_CODE_MAP.get(failure.code)
        if mapped is not None:
            kind, status_code, message = mapped
            return ClassifiedError(kind=kind, message=message, status_code=status_code, cause=cause)
        return ClassifiedError(
            kind=ErrorKind.API_ERROR,
            message=failure.message or BACKEND_FALLBACK_MESSAGE,
            status_code=500,
            cause=cause,
        )

    def _classify_status(self, failure: HttpFailure, cause: Any) -> ClassifiedError:
        mapped = _HTTP_STATUS_MAP.get(failure.status)
        if mapped is not None:
            kind, message = mapped
        else:
            kind, message = ErrorKind.API_ERROR, failure.message or HTTP_FALLBACK_MESSAGE
        return ClassifiedError(
            kind=kind,
            message=message,
            status_code=failure.status,
            cause=cause,
        )


_default_classifier = ErrorClassifier()


def classify_error(raw: Any, online: bool | None = None) -> ClassifiedError:
    """Classify with the process-wide default classifier."""
    return _default_classifier.classify(raw, online=online)


__all__ = [
    "ConnectivitySource",
    "ErrorClassifier",
    "OFFLINE_MESSAGE",
    "TRANSPORT_MESSAGE",
    "classify_error",
]
