"""Transient-failure detection and exponential-backoff retry.

The retry loop never retries a non-transient failure and never sleeps
after the final attempt. The sleeper is injectable so backoff timing can
be asserted without real waits.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from iconsmith.core.errors.fields import get_code, get_message, get_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleeper = Callable[[float], Awaitable[Any]]

BACKOFF_FACTOR = 2

TRANSIENT_NETWORK_CODES = frozenset({"ETIMEDOUT", "ECONNRESET", "ENOTFOUND", "ECONNREFUSED"})
TRANSIENT_MESSAGE_FRAGMENTS = ("timeout", "timed out", "connection reset", "network error")


class RetryPolicy(BaseModel):
    """Retry policy for calls to the image model.

    Immutable for the lifetime of the client that owns it.

    Args:
        max_retries: Total number of attempts (including the first call)
        initial_delay_ms: Delay before the first retry, in milliseconds

    Notes:
        The backoff factor is fixed at 2: the delay after attempt ``n``
        (0-indexed) is ``initial_delay_ms * 2**n``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: int = Field(default=3, ge=1)
    initial_delay_ms: float = Field(default=1000.0, ge=0.0)

    def compute_delay_ms(self, attempt: int) -> float:
        """Delay before the attempt following ``attempt``.

        Args:
            attempt: Failed attempt number (0-indexed)

        Returns:
            Delay in milliseconds
        """
        return self.initial_delay_ms * (BACKOFF_FACTOR**attempt)


def parse_retry_after_seconds(value: str | None) -> float | None:
    """Parse Retry-After header value to seconds.

    Handles numeric seconds format only (not HTTP-date format).

    Args:
        value: Retry-After header value

    Returns:
        Seconds to wait, or None if invalid or not provided
    """
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return seconds


def is_transient_error(error: object) -> bool:
    """Whether a failure is likely to succeed if retried.

    Transient:
    - HTTP 5xx on ``status``, ``status_code``, ``statusCode`` or ``response.status``
    - network codes ETIMEDOUT, ECONNRESET, ENOTFOUND, ECONNREFUSED
    - messages mentioning a timeout, connection reset or network error

    Args:
        error: Exception, mapping, or any other value

    Returns:
        True if the failure should be retried
    """
    if error is None:
        return False

    status = get_status(error)
    if status is not None and 500 <= status < 600:
        return True

    if get_code(error) in TRANSIENT_NETWORK_CODES:
        return True

    message = get_message(error).lower()
    return any(fragment in message for fragment in TRANSIENT_MESSAGE_FRAGMENTS)


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: Sleeper = asyncio.sleep,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> T:
    """Run ``operation`` with exponential backoff on transient failures.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        policy: Retry policy
        sleep: Async sleeper taking seconds (defaults to asyncio.sleep)
        logger: Optional logger for retry events

    Returns:
        The first successful result

    Raises:
        Exception: The failure itself when it is not transient, or the
            last failure once all attempts are used
    """
    log = logger or logging.getLogger(__name__)
    last_error: Exception | None = None

    for attempt in range(policy.max_retries):
        try:
            return await operation()
        except Exception as e:
            last_error = e
            is_last_attempt = attempt == policy.max_retries - 1
            if not is_transient_error(e) or is_last_attempt:
                raise

            delay_ms = policy.compute_delay_ms(attempt)
            log.warning(
                "Transient error on attempt %d/%d. Retrying in %dms: %s",
                attempt + 1,
                policy.max_retries,
                delay_ms,
                e,
                extra={"attempt": attempt + 1, "delay_ms": delay_ms},
            )
            await sleep(delay_ms / 1000.0)

    # Only reachable if the loop above stops raising on its final attempt
    if last_error is not None:
        raise last_error
    raise RuntimeError("Operation failed after retries")
