"""
Base HTTP client for third-party JSON APIs.

All outbound integrations (RapidAPI-hosted Glassdoor, LinkedIn Jobs and
JSearch, plus NewsAPI) share this request path so that HTTP failures are
classified the same way everywhere.
"""
import asyncio
import logging
import random
from typing import Dict, Optional, Any
import httpx

from app.core.api_errors import (
    APIError,
    RetryableError,
    RateLimitError,
    classify_http_error,
)
from app.core.config import get_settings

logger = logging.getLogger(__name__)


class BaseAPIClient:
    """
    Base class for external API clients.

    Subclasses set SOURCE_NAME and BASE_URL and override _build_headers()
    or _add_auth_to_params() to attach credentials.

    Attempts per request come from settings.http_max_retries; the default of
    one attempt means failures surface immediately to the caller.
    """

    SOURCE_NAME: str = "unknown"
    BASE_URL: str = ""

    DEFAULT_BACKOFF_FACTOR: float = 2.0
    DEFAULT_MAX_BACKOFF: float = 30.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self.api_key = api_key
        self.max_retries = max_retries or settings.http_max_retries
        self.timeout = timeout or settings.http_timeout
        self._client = client

        logger.debug(
            f"Initialized {self.SOURCE_NAME} client: "
            f"api_key_present={bool(api_key)}, max_retries={self.max_retries}"
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug(f"{self.SOURCE_NAME} client closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _backoff(self, attempt: int, base_delay: float = 1.0) -> None:
        """Exponential backoff with +/-25% jitter."""
        delay = min(base_delay * (self.DEFAULT_BACKOFF_FACTOR ** attempt), self.DEFAULT_MAX_BACKOFF)
        delay += delay * 0.25 * (2 * random.random() - 1)
        await asyncio.sleep(max(0.1, delay))

    def _build_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def _add_auth_to_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return params

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        resource_id: str = "unknown",
    ) -> Any:
        """
        Make an HTTP request and return the decoded JSON body.

        Args:
            method: HTTP method
            url: Full URL or path (BASE_URL is prepended to paths)
            params: Query parameters
            resource_id: Identifier for logging

        Raises:
            APIError: classified failure after the last attempt
        """
        if not url.startswith("http"):
            url = f"{self.BASE_URL.rstrip('/')}/{url.lstrip('/')}"

        params = self._add_auth_to_params(dict(params or {}))
        headers = self._build_headers()
        client = await self._get_client()

        last_error: Optional[APIError] = None
        for attempt in range(self.max_retries):
            is_last = attempt == self.max_retries - 1
            try:
                logger.debug(
                    f"[{self.SOURCE_NAME}] {method} {resource_id} "
                    f"(attempt {attempt + 1}/{self.max_retries})"
                )
                response = await client.request(method, url, params=params, headers=headers)
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                error = classify_http_error(
                    e.response.status_code, e.response.text[:500], self.SOURCE_NAME
                )
                if isinstance(error, RateLimitError):
                    retry_after = e.response.headers.get("Retry-After")
                    if retry_after and retry_after.isdigit():
                        error.retry_after = int(retry_after)
                if not error.retryable or is_last:
                    raise error
                logger.warning(f"[{self.SOURCE_NAME}] Retryable HTTP error: {error}")
                last_error = error

            except httpx.RequestError as e:
                error = RetryableError(message=f"Request failed: {e}", source=self.SOURCE_NAME)
                if is_last:
                    raise error
                logger.warning(f"[{self.SOURCE_NAME}] Request error (attempt {attempt + 1}): {e}")
                last_error = error

            except ValueError as e:
                # Body was not JSON
                raise APIError(
                    message=f"Invalid JSON response: {e}", source=self.SOURCE_NAME
                )

            await self._backoff(attempt)

        raise last_error or APIError(
            message=f"Failed to fetch {resource_id}", source=self.SOURCE_NAME
        )

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        resource_id: str = "unknown",
    ) -> Any:
        """Make GET request and return parsed JSON."""
        return await self._request("GET", url, params=params, resource_id=resource_id)


class RapidAPIClient(BaseAPIClient):
    """Base for RapidAPI-hosted providers (key and host travel as headers)."""

    RAPIDAPI_HOST: str = ""

    def _build_headers(self) -> Dict[str, str]:
        headers = super()._build_headers()
        headers["x-rapidapi-key"] = self.api_key or ""
        headers["x-rapidapi-host"] = self.RAPIDAPI_HOST
        return headers
