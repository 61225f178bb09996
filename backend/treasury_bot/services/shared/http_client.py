"""Base HTTP client with retry logic, timeouts, and error handling.

External API clients inherit from this class to get consistent retries
on transient network failures and a single error type for everything else.
"""

import logging
from typing import Any, Self

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class HTTPClient:
    """Base HTTP client with retry logic, timeouts, and error handling.

    Only timeouts and connection errors are retried; HTTP error statuses
    are raised immediately as HTTPClientError.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.default_headers = headers or {}
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy initialization of HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        reraise=True,
    )
    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return self.client.request(method=method, url=url, **kwargs)

    def _request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
        json: dict | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Make HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST)
            url: URL path (joined with base_url)
            params: Query parameters
            json: JSON body
            timeout: Per-request timeout override (long polling needs more)

        Returns:
            httpx.Response object

        Raises:
            HTTPClientError: On HTTP errors, timeouts, or connection failures
        """
        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout

        try:
            response = self._send(method, url, params=params, json=json, **extra)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.warning(
                "HTTP %s for %s %s: %s",
                e.response.status_code,
                method,
                url,
                e.response.text[:200],
            )
            raise HTTPClientError(
                message=f"HTTP {e.response.status_code}: {e.response.reason_phrase}",
                status_code=e.response.status_code,
                response_body=e.response.text,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning("Timeout for %s %s", method, url)
            raise HTTPClientError(f"Request timed out: {url}") from e
        except httpx.ConnectError as e:
            logger.warning("Connection error for %s %s: %s", method, url, e)
            raise HTTPClientError(f"Connection failed: {url}") from e

    def post_json(self, url: str, json: dict | None = None, timeout: float | None = None) -> Any:
        """HTTP POST returning parsed JSON."""
        return self._request("POST", url, json=json, timeout=timeout).json()
