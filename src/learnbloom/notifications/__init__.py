"""User notification and error reporting.

- toast: Toast payloads and ``show_error`` for user-visible errors
- reporter: Forwarding of error records to an external monitoring webhook
"""

from learnbloom.notifications.reporter import (
    ErrorReporter,
    MockErrorReporter,
    WebhookErrorReporter,
)
from learnbloom.notifications.toast import (
    Notify,
    Toast,
    ToastRecorder,
    show_error,
    toast_for_error,
)

__all__ = [
    "ErrorReporter",
    "MockErrorReporter",
    "Notify",
    "Toast",
    "ToastRecorder",
    "WebhookErrorReporter",
    "show_error",
    "toast_for_error",
]
