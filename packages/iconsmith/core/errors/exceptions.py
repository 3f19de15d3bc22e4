"""Error kinds raised across iconsmith.

Each kind is decided where the failure originates and carries its
structured fields explicitly, so the classifier never has to re-infer
them from message text:

- RequestValidationError: bad inbound request (fails fast, no API calls)
- ExternalApiError: the provider answered with an HTTP error status
- NetworkError: the provider could not be reached
- UrlExtractionError: the provider answered with an unknown shape
- IconGenerationError: one generation call failed (wraps the cause)
- IconSetGenerationError: the all-or-nothing batch failed
"""

from __future__ import annotations

from collections.abc import Sequence

import httpx
from pydantic import BaseModel, Field

_DNS_FAILURE_HINTS = ("name or service not known", "nodename nor servname", "getaddrinfo")


class IconsmithError(Exception):
    """Base exception for all iconsmith errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(IconsmithError):
    """Missing credentials or invalid configuration."""


class RequestValidationError(IconsmithError):
    """Inbound request failed validation.

    Attributes:
        message: Validation failure, safe to show to the user
        field: Name of the offending request field (if known)
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class ExternalApiErrorData(BaseModel):
    """Structured data for provider HTTP errors.

    Args:
        message: Human-readable error description
        status_code: HTTP status code returned by the provider
        code: Provider-specific error code (if any)
        retry_after: Seconds to wait before retrying (from Retry-After)
        cause: Original exception that caused this error
    """

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    message: str
    status_code: int
    code: str | None = None
    retry_after: float | None = None
    cause: BaseException | None = Field(default=None, repr=False)


class ExternalApiError(IconsmithError):
    """The external provider answered with an HTTP error status.

    Attributes:
        data: Structured error data (ExternalApiErrorData)
        status_code: HTTP status code
        code: Provider-specific error code
        retry_after: Seconds to wait before retrying
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None = None,
        retry_after: float | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.data = ExternalApiErrorData(
            message=message,
            status_code=status_code,
            code=code,
            retry_after=retry_after,
            cause=cause,
        )
        self.status_code = self.data.status_code
        self.code = self.data.code
        self.retry_after = self.data.retry_after
        self.cause = self.data.cause
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message, f"status={self.status_code}"]
        if self.code:
            parts.append(f"code={self.code}")
        return " | ".join(parts)


class NetworkError(IconsmithError):
    """Network-level failure (DNS, refused connection, reset, timeout).

    Attributes:
        code: Network error code (ETIMEDOUT, ECONNRESET, ENOTFOUND, ECONNREFUSED)
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.code = code
        self.cause = cause
        super().__init__(message)


class UrlExtractionError(IconsmithError):
    """Provider output did not match any known response shape."""


class ImageValidationError(IconsmithError):
    """Downloaded image is too short to inspect."""


class IconGenerationError(IconsmithError):
    """A single icon generation call failed.

    The cause's status code and error code are copied onto the wrapper so
    retry decisions and classification still see them.

    Attributes:
        cause: Original exception raised by the model call
        status_code: HTTP status from the cause (if any)
        code: Error code from the cause (if any)
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.cause = cause
        self.status_code: int | None = getattr(cause, "status_code", None)
        self.code: str | None = getattr(cause, "code", None)
        self.retry_after: float | None = getattr(cause, "retry_after", None)
        super().__init__(message)


class IconSetGenerationError(IconsmithError):
    """Fewer than all icons of a set were generated.

    Attributes:
        succeeded: Number of calls that succeeded
        total: Number of calls launched
        failures: Indexed failure messages, one per failed call
        errors: The exceptions behind ``failures``, in the same order
    """

    code = "GENERATION_ERROR"

    def __init__(
        self,
        *,
        succeeded: int,
        total: int,
        failures: Sequence[str],
        errors: Sequence[BaseException] = (),
    ) -> None:
        self.succeeded = succeeded
        self.total = total
        self.failures = list(failures)
        self.errors = list(errors)
        message = (
            "Failed to generate complete icon set. "
            f"Generated {succeeded} out of {total} icons. "
            f"Errors: {'; '.join(self.failures)}"
        )
        super().__init__(message)


def network_error_from_httpx(exc: httpx.TransportError, *, prefix: str) -> NetworkError:
    """Translate an httpx transport failure into a NetworkError.

    Args:
        exc: The httpx exception
        prefix: Message prefix describing the failed operation

    Returns:
        NetworkError with a stable network error code
    """
    if isinstance(exc, httpx.TimeoutException):
        code = "ETIMEDOUT"
    elif isinstance(exc, httpx.ConnectError):
        text = str(exc).lower()
        if any(hint in text for hint in _DNS_FAILURE_HINTS):
            code = "ENOTFOUND"
        else:
            code = "ECONNREFUSED"
    elif isinstance(exc, (httpx.ReadError, httpx.RemoteProtocolError)):
        code = "ECONNRESET"
    else:
        code = "NETWORK_ERROR"
    return NetworkError(f"{prefix}: {exc}", code=code, cause=exc)
