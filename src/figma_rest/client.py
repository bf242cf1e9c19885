"""Figma REST Base Client.

Provides async HTTP client for all Figma API endpoints, with retry on
rate limits / server errors and optional response caching.
"""
import logging
import os
import time
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlencode

import httpx

from .cache import Cache
from .errors import FigmaError, parse_figma_error_response
from .rate_limit import RateLimitInfo, parse_headers
from .retry import (
    RATE_LIMIT_RETRY_DELAY_MS,
    TOO_MANY_REQUESTS,
    get_retry_after,
    with_retry,
)


FIGMA_API_BASE = "https://api.figma.com"
FIGMA_TOKEN_HEADER = "X-Figma-Token"

DEFAULT_CACHE_TTL_MS = 5 * 60 * 1000

log = logging.getLogger(__name__)


@dataclass
class FigmaConfig:
    """Configuration for Figma API client."""
    api_key: str
    base_url: str = FIGMA_API_BASE
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay_ms: float = RATE_LIMIT_RETRY_DELAY_MS
    cache_ttl_ms: float = DEFAULT_CACHE_TTL_MS

    def __post_init__(self):
        if not self.api_key:
            raise ValueError("Figma access token is required")
        self.base_url = (self.base_url or FIGMA_API_BASE).rstrip("/")

    @classmethod
    def from_env(cls) -> "FigmaConfig":
        """Build configuration from environment variables.

        FIGMA_API_KEY (or FIGMA_ACCESS_TOKEN) is required. FIGMA_BASE_URL
        and REQUEST_TIMEOUT_MS are optional overrides.
        """
        api_key = os.getenv("FIGMA_API_KEY") or os.getenv("FIGMA_ACCESS_TOKEN")
        if not api_key:
            raise ValueError("FIGMA_API_KEY environment variable is required")

        config = cls(api_key=api_key, base_url=os.getenv("FIGMA_BASE_URL") or FIGMA_API_BASE)
        timeout_ms = os.getenv("REQUEST_TIMEOUT_MS")
        if timeout_ms:
            config.timeout = int(timeout_ms) / 1000
        return config


class FigmaClient:
    """HTTP client bound to one Figma token.

    Every request goes through `with_retry`. When a cache is given, GET
    responses are memoized for `config.cache_ttl_ms`.
    """

    def __init__(
        self,
        config: FigmaConfig,
        cache: Optional[Cache] = None,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        cache_key_prefix: str = ""
    ):
        self.config = config
        self.cache = cache
        self.cache_key_prefix = cache_key_prefix
        self.rate_limit_info: Optional[RateLimitInfo] = None
        self._logger = logger or log
        self._transport = transport

    def _headers(self) -> dict:
        return {
            FIGMA_TOKEN_HEADER: self.config.api_key,
            "Content-Type": "application/json",
        }

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json_data: Optional[dict] = None
    ) -> Any:
        self._logger.debug("HTTP Request %s %s", method, url)
        started = time.monotonic()

        async with httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport) as client:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers=self._headers()
            )

        duration_ms = round((time.monotonic() - started) * 1000)
        self._logger.info("HTTP Response %s %s status=%s duration=%sms", method, url, response.status_code, duration_ms)

        self.rate_limit_info = parse_headers(response.headers)

        if response.status_code >= 400:
            raise self._error_from_response(response)

        if not response.content:
            return {}
        return response.json()

    def _error_from_response(self, response: httpx.Response) -> FigmaError:
        message = parse_figma_error_response(response)

        if response.status_code == TOO_MANY_REQUESTS:
            retry_after = get_retry_after(response.headers)
            if retry_after:
                message = f"{message} (Retry after {retry_after} seconds)"
            self._logger.warning(
                "Rate limit exceeded status=%s retry_after=%s rate_limit=%s",
                response.status_code, retry_after, self.rate_limit_info
            )
        else:
            self._logger.error("HTTP Error status=%s message=%s", response.status_code, message)

        return FigmaError(message, response.status_code, self.rate_limit_info)

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_data: Optional[dict] = None
    ) -> Any:
        """Make a request to Figma API.

        Args:
            method: HTTP method (GET, POST, DELETE)
            endpoint: API endpoint (e.g., /v1/files/{file_key})
            params: Query parameters
            json_data: JSON body for POST requests

        Returns:
            Response JSON

        Raises:
            FigmaError: On any HTTP error status, after retries are exhausted
        """
        url = f"{self.config.base_url}{endpoint}"
        return await with_retry(
            lambda: self._send(method, url, params=params, json_data=json_data),
            max_retries=self.config.max_retries,
            base_delay_ms=self.config.retry_delay_ms
        )

    def cache_key(self, method: str, endpoint: str, params: Optional[dict] = None) -> str:
        query = urlencode(params or {}, doseq=True)
        full_endpoint = f"{endpoint}?{query}" if query else endpoint
        return f"{self.cache_key_prefix}{method}:{full_endpoint}"

    async def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        """GET request to Figma API, served from cache when possible."""
        if self.cache is None:
            return await self.request("GET", endpoint, params=params)

        key = self.cache_key("GET", endpoint, params)
        cached = self.cache.get(key)
        if cached is not None:
            self._logger.debug("Cache hit %s", key)
            return cached

        self._logger.debug("Cache miss %s", key)
        result = await self.request("GET", endpoint, params=params)
        self.cache.set(key, result, self.config.cache_ttl_ms)
        self._logger.debug("Cached response %s ttl=%sms", key, self.config.cache_ttl_ms)
        return result

    async def post(self, endpoint: str, json_data: Optional[dict] = None) -> Any:
        """POST request to Figma API."""
        return await self.request("POST", endpoint, json_data=json_data)

    async def delete(self, endpoint: str, params: Optional[dict] = None) -> Any:
        """DELETE request to Figma API."""
        return await self.request("DELETE", endpoint, params=params)
