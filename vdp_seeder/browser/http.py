"""
Plain HTTP fetch capability built on httpx.
For sites that serve their sitemaps without a browser in front.
"""

from typing import Optional
import httpx

from .base import BaseFetcher, DEFAULT_HEADERS
from ..errors import CapabilityInitError, FetchError
from ..models import FetchResponse, SeederConfig


class HttpFetcher(BaseFetcher):
    """Fetch capability backed by a single httpx.AsyncClient."""

    def __init__(
        self,
        config: SeederConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(config)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self):
        self.logger.info("Starting HTTP client...")

        try:
            self._client = httpx.AsyncClient(
                headers={**DEFAULT_HEADERS, 'User-Agent': self.user_agent},
                follow_redirects=True,
                transport=self._transport,
            )
        except Exception as e:
            raise CapabilityInitError(f"Failed to create HTTP client: {e}") from e

    async def stop(self):
        if self._client:
            try:
                await self._client.aclose()
            except Exception as e:
                self.logger.warning(f"Error closing HTTP client: {e}")
            self._client = None

    async def fetch(self, url: str, timeout_ms: int) -> FetchResponse:
        if not self._client:
            raise RuntimeError("HTTP client not started. Call start() first.")

        self.logger.debug(f"GET {url} (timeout {timeout_ms}ms)")

        try:
            response = await self._client.get(url, timeout=timeout_ms / 1000)
        except httpx.TimeoutException as e:
            raise FetchError(url, f"timeout after {timeout_ms}ms") from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

        return FetchResponse(url=url, status=response.status_code, content=response.text)
