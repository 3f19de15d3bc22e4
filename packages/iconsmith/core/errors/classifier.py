"""Map any raised value into a stable, user-facing error payload.

Classification precedence:

1. IconSetGenerationError -> SERVER (502, GENERATION_ERROR), or
   AUTHENTICATION (401, GENERATION_ERROR) when every failed call was an
   authentication failure
2. RequestValidationError -> VALIDATION (400)
   ConfigurationError -> AUTHENTICATION (401, missing credentials)
3. ExternalApiError -> by status (401 / 429 / 5xx / 4xx)
4. NetworkError -> NETWORK (503), message looked up by network code
5. Other exceptions with a status field -> by status, as in 3
6. Other exceptions -> keyword matching on the lowercase message
7. Anything else -> UNKNOWN (500), original value kept as ``details``

Recoverability depends on the category alone: only AUTHENTICATION is
non-recoverable.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from iconsmith.core.errors.exceptions import (
    ConfigurationError,
    ExternalApiError,
    IconGenerationError,
    IconSetGenerationError,
    NetworkError,
    RequestValidationError,
)
from iconsmith.core.errors.fields import get_code, get_message, get_retry_after, get_status

logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Stable error taxonomy surfaced to callers."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    NETWORK = "network"
    API = "api"
    UNKNOWN = "unknown"

    @property
    def recoverable(self) -> bool:
        """Whether the user can retry after an error of this category."""
        return self is not ErrorCategory.AUTHENTICATION


AUTHENTICATION_MESSAGE = "Authentication failed. Please check your API credentials."
SERVER_MESSAGE = "Service temporarily unavailable. Please try again."
RATE_LIMIT_MESSAGE = "Rate limit exceeded."
NETWORK_MESSAGE = "Network error occurred. Please check your connection and try again."
NETWORK_KEYWORD_MESSAGE = "Network error occurred. Please try again."
UNKNOWN_MESSAGE = "An unexpected error occurred. Please try again."

NETWORK_MESSAGES: dict[str, str] = {
    "ETIMEDOUT": "Request timed out. Please check your connection and try again.",
    "ECONNRESET": "Connection was reset. Please try again.",
    "ENOTFOUND": "Unable to reach the service. Please check your connection.",
    "ECONNREFUSED": "Connection refused. The service may be unavailable.",
}

# Checked in this order
VALIDATION_KEYWORDS = ("required", "invalid", "validation", "must be", "cannot be empty")
NETWORK_KEYWORDS = ("timeout", "network", "connection", "econnreset", "etimedout")
AUTHENTICATION_KEYWORDS = ("unauthorized", "authentication", "api token", "api key")
RATE_LIMIT_KEYWORDS = ("rate limit", "too many requests")


class ClassifiedError(BaseModel):
    """User-facing error produced by classify_error.

    Derived fresh on every classification; never cached.

    Attributes:
        category: Error category
        message: User-facing message
        recoverable: Whether retrying may succeed (derived from category)
        status_code: HTTP status to surface
        code: Stable error code
        retry_after: Seconds until retry is sensible (rate limits only)
        details: Opaque original value (unknown errors only)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    category: ErrorCategory
    message: str
    recoverable: bool
    status_code: int
    code: str
    retry_after: float | None = None
    details: Any = Field(default=None, repr=False)


def _classified(
    category: ErrorCategory,
    message: str,
    status_code: int,
    code: str,
    *,
    retry_after: float | None = None,
    details: Any = None,
) -> ClassifiedError:
    return ClassifiedError(
        category=category,
        message=message,
        recoverable=category.recoverable,
        status_code=status_code,
        code=code,
        retry_after=retry_after,
        details=details,
    )


def _format_seconds(seconds: float) -> str:
    if float(seconds).is_integer():
        return str(int(seconds))
    return str(seconds)


def _rate_limit(retry_after: float | None) -> ClassifiedError:
    if retry_after:
        hint = f" Please try again in {_format_seconds(retry_after)} seconds."
    else:
        hint = " Please try again in a moment."
    return _classified(
        ErrorCategory.RATE_LIMIT,
        f"{RATE_LIMIT_MESSAGE}{hint}",
        429,
        "RATE_LIMIT_ERROR",
        retry_after=retry_after,
    )


def _classify_status(
    status: int,
    message: str,
    code: str | None,
    retry_after: float | None,
) -> ClassifiedError | None:
    """Classify by HTTP status; None when the status is not an error status."""
    if status == 401:
        return _classified(
            ErrorCategory.AUTHENTICATION, AUTHENTICATION_MESSAGE, 401, "AUTHENTICATION_ERROR"
        )
    if status == 429:
        return _rate_limit(retry_after)
    if 500 <= status < 600:
        return _classified(ErrorCategory.SERVER, SERVER_MESSAGE, status, "SERVER_ERROR")
    if 400 <= status < 500:
        return _classified(
            ErrorCategory.API,
            message or "Invalid request. Please check your input.",
            status,
            code or "API_ERROR",
        )
    return None


def _classify_api_error(error: ExternalApiError) -> ClassifiedError:
    result = _classify_status(error.status_code, error.message, error.code, error.retry_after)
    if result is not None:
        return result
    return _classified(
        ErrorCategory.API,
        error.message or "An error occurred while communicating with the API.",
        error.status_code,
        error.code or "API_ERROR",
    )


def _classify_network_error(error: NetworkError) -> ClassifiedError:
    message = NETWORK_MESSAGES.get(error.code or "", NETWORK_MESSAGE)
    return _classified(ErrorCategory.NETWORK, message, 503, error.code or "NETWORK_ERROR")


def _classify_by_keywords(message: str) -> ClassifiedError | None:
    lowered = message.lower()

    if any(keyword in lowered for keyword in VALIDATION_KEYWORDS):
        return _classified(ErrorCategory.VALIDATION, message, 400, "VALIDATION_ERROR")

    if any(keyword in lowered for keyword in NETWORK_KEYWORDS):
        return _classified(ErrorCategory.NETWORK, NETWORK_KEYWORD_MESSAGE, 503, "NETWORK_ERROR")

    if any(keyword in lowered for keyword in AUTHENTICATION_KEYWORDS):
        return _classified(
            ErrorCategory.AUTHENTICATION, AUTHENTICATION_MESSAGE, 401, "AUTHENTICATION_ERROR"
        )

    if any(keyword in lowered for keyword in RATE_LIMIT_KEYWORDS):
        return _rate_limit(None)

    return None


def classify_error(
    error: object,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> ClassifiedError:
    """Classify any raised value into a ClassifiedError.

    Args:
        error: Exception, mapping, primitive, or None
        logger: Optional logger (defaults to the module logger)

    Returns:
        ClassifiedError with category, message, status and code
    """
    log = logger or logging.getLogger(__name__)

    # Tagged kinds wrapped by a single generation call keep their own category
    if isinstance(error, IconGenerationError) and isinstance(
        error.cause, (ExternalApiError, NetworkError, RequestValidationError)
    ):
        error = error.cause

    if isinstance(error, IconSetGenerationError):
        # Every failed call rejected the credentials
        if error.errors and all(
            classify_error(e, logger=log).category is ErrorCategory.AUTHENTICATION
            for e in error.errors
        ):
            return _classified(ErrorCategory.AUTHENTICATION, error.message, 401, error.code)
        return _classified(ErrorCategory.SERVER, error.message, 502, error.code)

    if isinstance(error, RequestValidationError):
        return _classified(ErrorCategory.VALIDATION, error.message, 400, "VALIDATION_ERROR")

    if isinstance(error, ConfigurationError):
        return _classified(
            ErrorCategory.AUTHENTICATION, AUTHENTICATION_MESSAGE, 401, "AUTHENTICATION_ERROR"
        )

    if isinstance(error, ExternalApiError):
        return _classify_api_error(error)

    if isinstance(error, NetworkError):
        return _classify_network_error(error)

    if isinstance(error, Exception):
        message = get_message(error)

        status = get_status(error)
        if status is not None:
            result = _classify_status(status, message, get_code(error), get_retry_after(error))
            if result is not None:
                return result

        result = _classify_by_keywords(message)
        if result is not None:
            return result

        return _classified(
            ErrorCategory.UNKNOWN,
            message or UNKNOWN_MESSAGE,
            500,
            "INTERNAL_ERROR",
            details=error,
        )

    log.error("Unknown error type: %r", error)
    return _classified(
        ErrorCategory.UNKNOWN,
        UNKNOWN_MESSAGE,
        500,
        "UNKNOWN_ERROR",
        details=error,
    )


def is_recoverable(error: object) -> bool:
    """Whether the user can retry after this error."""
    return classify_error(error).recoverable


def get_status_code(error: object) -> int:
    """HTTP status code to surface for this error."""
    return classify_error(error).status_code


def get_error_code(error: object) -> str:
    """Stable error code for this error."""
    return classify_error(error).code


def get_user_message(error: object) -> str:
    """User-facing message for this error."""
    return classify_error(error).message
