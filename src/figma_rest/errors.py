"""Figma REST - Errors."""
from typing import Any, Optional

import httpx

from .rate_limit import RateLimitInfo
from .retry import TOO_MANY_REQUESTS


class FigmaError(Exception):
    """Error response from the Figma API."""

    def __init__(
        self,
        message: str,
        status: int,
        rate_limit_info: Optional[RateLimitInfo] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.rate_limit_info = rate_limit_info

    def __repr__(self) -> str:
        return f"FigmaError(status={self.status}, message={self.message!r})"


def parse_figma_error_response(response: httpx.Response) -> str:
    """Extract a readable message from an error response.

    Figma puts the message in `err` (most endpoints) or `message`.
    Falls back to the status line when the body is not JSON.
    """
    fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
    try:
        data = response.json()
    except ValueError:
        return fallback

    if isinstance(data, dict):
        return data.get("err") or data.get("message") or fallback
    return fallback


def is_rate_limit_error(error: Any) -> bool:
    return isinstance(error, FigmaError) and error.status == TOO_MANY_REQUESTS
