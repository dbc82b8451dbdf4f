"""Error classification and handling.

Re-exports all public symbols so callers can import from one place.
"""

from learnbloom.core.errors.codes import (
    DEFAULT_MESSAGES,
    ERROR_TITLES,
    GENERIC_TITLE,
    BackendCode,
    ErrorKind,
    get_error_title,
)
from learnbloom.core.errors.models import (
    AppError,
    BackendDataError,
    ClassifiedError,
    GenericFailure,
    HttpFailure,
    NetworkFailure,
    RawFailure,
)
from learnbloom.core.errors.parsers import extract_message, to_raw_failure
from learnbloom.core.errors.classifier import ErrorClassifier, classify_error

__all__ = [
    "DEFAULT_MESSAGES",
    "ERROR_TITLES",
    "GENERIC_TITLE",
    "BackendCode",
    "ErrorKind",
    "get_error_title",
    "AppError",
    "BackendDataError",
    "ClassifiedError",
    "GenericFailure",
    "HttpFailure",
    "NetworkFailure",
    "RawFailure",
    "extract_message",
    "to_raw_failure",
    "ErrorClassifier",
    "classify_error",
]
