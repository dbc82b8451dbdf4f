"""Toast payloads for user-visible error notification.

The presentation layer never shows raw technical detail: the title comes
from the fixed per-kind table and the description is the classified
message.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from learnbloom.core.errors import (
    GENERIC_TITLE,
    AppError,
    ClassifiedError,
    extract_message,
    get_error_title,
)

UNKNOWN_DESCRIPTION = "发生未知错误"

ToastVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Toast:
    """A toast/dialog notification."""

    title: str
    description: str | None = None
    variant: ToastVariant = "default"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant,
        }


Notify = Callable[[Toast], object]
"""Notification function supplied by the caller (a toast hook, a CLI printer...)."""


def toast_for_error(error: Any) -> Toast:
    """Build the destructive toast for any error value."""
    if isinstance(error, AppError):
        error = error.error
    if isinstance(error, ClassifiedError):
        return Toast(
            title=get_error_title(error.kind),
            description=error.message,
            variant="destructive",
        )
    return Toast(
        title=GENERIC_TITLE,
        description=extract_message(error) or UNKNOWN_DESCRIPTION,
        variant="destructive",
    )


def show_error(error: Any, notify: Notify) -> Toast:
    """Notify the user about an error.

    Args:
        error: A ClassifiedError or AppError (titled by kind), or any other
            value (shown under the generic title).
        notify: Callable that displays the toast.

    Returns:
        The toast that was passed to ``notify``.
    """
    toast = toast_for_error(error)
    notify(toast)
    return toast


@dataclass
class ToastRecorder:
    """Notifier that collects toasts instead of displaying them."""

    toasts: list[Toast] = field(default_factory=list)

    def __call__(self, toast: Toast) -> None:
        self.toasts.append(toast)

    @property
    def last(self) -> Toast | None:
        return self.toasts[-1] if self.toasts else None


__all__ = [
    "Notify",
    "Toast",
    "ToastRecorder",
    "ToastVariant",
    "UNKNOWN_DESCRIPTION",
    "show_error",
    "toast_for_error",
]
