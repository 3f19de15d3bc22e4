"""Error kinds and the user-facing error classifier."""

from iconsmith.core.errors.classifier import (
    ClassifiedError,
    ErrorCategory,
    classify_error,
    get_error_code,
    get_status_code,
    get_user_message,
    is_recoverable,
)
from iconsmith.core.errors.exceptions import (
    ConfigurationError,
    ExternalApiError,
    IconGenerationError,
    IconsmithError,
    IconSetGenerationError,
    ImageValidationError,
    NetworkError,
    RequestValidationError,
    UrlExtractionError,
)

__all__ = [
    # Classifier
    "ClassifiedError",
    "ErrorCategory",
    "classify_error",
    "get_error_code",
    "get_status_code",
    "get_user_message",
    "is_recoverable",
    # Error kinds
    "ConfigurationError",
    "ExternalApiError",
    "IconGenerationError",
    "IconsmithError",
    "IconSetGenerationError",
    "ImageValidationError",
    "NetworkError",
    "RequestValidationError",
    "UrlExtractionError",
]
