"""Figma REST - Rate Limit Headers.

Parses the quota headers Figma attaches to API responses.
"""
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union


RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class RateLimitInfo:
    """Remaining request quota and the moment it resets."""
    remaining: Union[int, float]
    reset: Optional[datetime]


def parse_int(value: str) -> Union[int, float]:
    """Parse the leading decimal integer of a string.

    Trailing characters are ignored ("42abc" -> 42). Returns nan when
    the string does not start with a number.
    """
    match = _LEADING_INT.match(value)
    if not match:
        return math.nan
    return int(match.group(1))


def _epoch_to_datetime(seconds: Union[int, float]) -> Optional[datetime]:
    if isinstance(seconds, float) and math.isnan(seconds):
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_headers(headers: Any) -> Optional[RateLimitInfo]:
    """Extract rate limit info from response headers.

    Args:
        headers: Any object exposing `get(name)` (httpx.Headers, dict, ...)

    Returns:
        RateLimitInfo, or None if either header is missing
    """
    remaining = headers.get(RATE_LIMIT_REMAINING_HEADER)
    reset = headers.get(RATE_LIMIT_RESET_HEADER)

    if not remaining or not reset:
        return None

    return RateLimitInfo(
        remaining=parse_int(remaining),
        reset=_epoch_to_datetime(parse_int(reset)),
    )
