from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from volleylive.config.settings import settings

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    pass


class RateLimitError(ScraperError):
    """Exception raised for rate limit errors (429)."""

    pass


class BaseScraper:
    """Shared HTTP plumbing for the live API: client setup, retries, JSON decoding."""

    source: str = "live-api"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        headers = {"Accept": "application/json", "Cache-Control": "no-store"}
        if settings.api_token:
            headers["Authorization"] = f"Bearer {settings.api_token}"
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout_seconds),
            follow_redirects=True,
            headers=headers,
        )

    @retry(
        stop=stop_after_attempt(4),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(
            (httpx.RequestError, httpx.HTTPStatusError, RateLimitError)
        ),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request with retry logic."""
        url = f"{self.base_url}{path}"
        logger.debug(f"Making request {method} {url}", params=params)
        try:
            response = await self.client.request(method, url, params=params, **kwargs)

            if response.status_code == 429:
                retry_after = response.headers.get("Retry-After")
                logger.warning(
                    f"Rate limit hit (429) for {self.source} at {url}. Retry-After: {retry_after}"
                )
                raise RateLimitError(f"Rate limited by {self.source}")

            response.raise_for_status()  # Raises HTTPStatusError for 4xx/5xx
            logger.debug(f"Request successful: {response.status_code} for {url}")
            return response

        except httpx.HTTPStatusError as e:
            if e.response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(
                    f"Retrying request for {self.source} due to status {e.response.status_code}: {e}"
                )
                raise  # Re-raise to trigger tenacity retry
            logger.error(
                f"HTTP error during request for {self.source}: {e.response.status_code} - {e}"
            )
            raise ScraperError(f"HTTP error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            # Network errors, timeouts etc. - these are retryable by default
            logger.warning(f"Request error for {self.source}, retrying: {e}")
            raise

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GETs a path and decodes the JSON body, wrapping every failure in ScraperError."""
        try:
            response = await self._make_request("GET", path, params=params)
        except ScraperError:
            raise
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error(f"Max retries exceeded for {self.source} request to {path}: {e}")
            raise ScraperError(
                f"Failed request to {self.source} after multiple retries"
            ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Error parsing JSON from {path}: {e}")
            logger.debug(f"Raw response content: {response.text[:500]}")
            raise ScraperError(f"Invalid JSON from {path}") from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source}")
