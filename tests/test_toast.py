"""Tests for learnbloom.notifications.toast."""

from __future__ import annotations

import pytest

from learnbloom.core.errors import AppError, ClassifiedError, ErrorKind
from learnbloom.notifications.toast import (
    UNKNOWN_DESCRIPTION,
    Toast,
    ToastRecorder,
    show_error,
    toast_for_error,
)


class TestToastForError:
    @pytest.mark.parametrize(
        ("kind", "title"),
        [
            (ErrorKind.NETWORK_ERROR, "网络错误"),
            (ErrorKind.AUTHENTICATION_ERROR, "身份验证错误"),
            (ErrorKind.AUTHORIZATION_ERROR, "权限错误"),
            (ErrorKind.VALIDATION_ERROR, "输入错误"),
            (ErrorKind.NOT_FOUND_ERROR, "资源不存在"),
            (ErrorKind.SERVER_ERROR, "服务器错误"),
            (ErrorKind.API_ERROR, "错误"),
            (ErrorKind.UNKNOWN_ERROR, "错误"),
        ],
    )
    def test_title_per_kind(self, kind, title):
        toast = toast_for_error(ClassifiedError(kind, "描述"))
        assert toast == Toast(title=title, description="描述", variant="destructive")

    def test_app_error_is_unwrapped(self):
        error = AppError(ClassifiedError(ErrorKind.NOT_FOUND_ERROR, "请求的数据不存在", 404))
        toast = toast_for_error(error)
        assert toast.title == "资源不存在"
        assert toast.description == "请求的数据不存在"

    def test_plain_exception_uses_generic_title(self):
        toast = toast_for_error(RuntimeError("upload failed"))
        assert toast.title == "错误"
        assert toast.description == "upload failed"
        assert toast.variant == "destructive"

    @pytest.mark.parametrize("error", [None, RuntimeError(), {}])
    def test_missing_message_uses_unknown_description(self, error):
        assert toast_for_error(error).description == UNKNOWN_DESCRIPTION


class TestShowError:
    def test_notifies_and_returns_toast(self, toasts: ToastRecorder):
        error = ClassifiedError(ErrorKind.SERVER_ERROR, "服务器错误，请稍后重试", 503)

        toast = show_error(error, toasts)

        assert toasts.toasts == [toast]
        assert toasts.last.title == "服务器错误"

    def test_to_dict(self):
        toast = Toast(title="错误", description="x", variant="destructive")
        assert toast.to_dict() == {"title": "错误", "description": "x", "variant": "destructive"}

    def test_recorder_last_when_empty(self):
        assert ToastRecorder().last is None
