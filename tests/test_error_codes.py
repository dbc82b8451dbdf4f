"""Tests for learnbloom.core.errors.codes."""

from learnbloom.core.errors.codes import (
    DEFAULT_MESSAGES,
    ERROR_TITLES,
    GENERIC_TITLE,
    SERVER_ERROR_STATUSES,
    BackendCode,
    ErrorKind,
    get_error_title,
)


class TestErrorKind:
    """Tests for the closed ErrorKind taxonomy."""

    def test_has_exactly_eight_kinds(self):
        assert len(ErrorKind) == 8

    def test_values_are_stable_strings(self):
        assert ErrorKind.NETWORK_ERROR.value == "NETWORK_ERROR"
        assert ErrorKind("NOT_FOUND_ERROR") is ErrorKind.NOT_FOUND_ERROR

    def test_kind_is_a_str(self):
        assert isinstance(ErrorKind.API_ERROR, str)


class TestTables:
    """Tests for the per-kind message and title tables."""

    def test_every_kind_has_a_default_message(self):
        assert set(DEFAULT_MESSAGES) == set(ErrorKind)

    def test_every_kind_has_a_title(self):
        assert set(ERROR_TITLES) == set(ErrorKind)

    def test_titles(self):
        assert get_error_title(ErrorKind.NETWORK_ERROR) == "网络错误"
        assert get_error_title(ErrorKind.AUTHENTICATION_ERROR) == "身份验证错误"
        assert get_error_title(ErrorKind.AUTHORIZATION_ERROR) == "权限错误"
        assert get_error_title(ErrorKind.VALIDATION_ERROR) == "输入错误"
        assert get_error_title(ErrorKind.NOT_FOUND_ERROR) == "资源不存在"
        assert get_error_title(ErrorKind.SERVER_ERROR) == "服务器错误"

    def test_api_and_unknown_share_generic_title(self):
        assert GENERIC_TITLE == "错误"
        assert get_error_title(ErrorKind.API_ERROR) == GENERIC_TITLE
        assert get_error_title(ErrorKind.UNKNOWN_ERROR) == GENERIC_TITLE

    def test_server_error_statuses(self):
        assert SERVER_ERROR_STATUSES == {500, 502, 503, 504}

    def test_backend_codes(self):
        assert BackendCode.NO_ROWS == "PGRST116"
        assert BackendCode.INSUFFICIENT_PRIVILEGE == "PGRST301"
        assert BackendCode.DB_INSUFFICIENT_PRIVILEGE == "42501"
        assert BackendCode.UNIQUE_VIOLATION == "23505"
        assert BackendCode.FOREIGN_KEY_VIOLATION == "23503"
