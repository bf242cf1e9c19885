"""Figma REST - Retry with Exponential Backoff.

Retries rate-limited (429) and server-side (5xx) failures.
"""
import asyncio
import numbers
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .rate_limit import parse_int


T = TypeVar("T")

TOO_MANY_REQUESTS = 429
INTERNAL_SERVER_ERROR = 500

RATE_LIMIT_RETRY_DELAY_MS = 1000
RETRY_AFTER_HEADER = "Retry-After"


def should_retry(error: Any) -> bool:
    """Return True if the error carries a retryable HTTP status.

    Only exceptions with a numeric `status` attribute are considered:
    429 or any 5xx status is retryable, everything else is not.
    """
    if not isinstance(error, BaseException):
        return False

    status = getattr(error, "status", None)
    if not isinstance(status, numbers.Real) or isinstance(status, bool):
        return False

    return status == TOO_MANY_REQUESTS or INTERNAL_SERVER_ERROR <= status < 600


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    base_delay_ms: float = RATE_LIMIT_RETRY_DELAY_MS,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
) -> T:
    """Run an async operation, retrying retryable failures.

    Waits `base_delay_ms * 2**i` between attempt i and i + 1. The error
    from the last attempt is re-raised unchanged.

    Args:
        operation: Zero-argument coroutine function, called once per attempt
        max_retries: Total number of attempts
        base_delay_ms: Delay before the second attempt, in milliseconds
        sleep: Awaitable sleep taking seconds

    Returns:
        The operation's result
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    for attempt in range(max_retries):
        try:
            return await operation()
        except Exception as error:
            if not should_retry(error) or attempt == max_retries - 1:
                raise

        await sleep(base_delay_ms * (2 ** attempt) / 1000)

    raise AssertionError("unreachable")


def get_retry_after(headers: Any) -> Optional[int]:
    """Read the Retry-After header as whole seconds, if present."""
    retry_after = headers.get(RETRY_AFTER_HEADER)
    if not retry_after:
        return None

    seconds = parse_int(retry_after)
    return seconds if isinstance(seconds, int) else None
