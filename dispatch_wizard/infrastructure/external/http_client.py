"""
HTTP client utilities for external API calls.
"""

import time
from typing import Any, Dict, Optional

import httpx

from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings

logger = get_logger(__name__)


class HTTPClient:
    """HTTP client for external API calls."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self.transport = transport
        self.client = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    async def get(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> httpx.Response:
        """Make GET request."""
        return await self._request("GET", url, headers=headers)

    async def post(
        self,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make POST request."""
        return await self._request("POST", url, data=data, headers=headers)

    async def _request(
        self,
        method: str,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        start_time = time.time()

        try:
            response = await self.client.request(method, url, json=data, headers=headers)

            response_time = (time.time() - start_time) * 1000

            logger.debug(
                f"HTTP {method} request completed",
                url=url,
                status_code=response.status_code,
                response_time_ms=response_time,
            )

            return response

        except httpx.HTTPError as e:
            response_time = (time.time() - start_time) * 1000

            logger.error(
                f"HTTP {method} request failed",
                url=url,
                error=str(e),
                response_time_ms=response_time,
            )
            raise
