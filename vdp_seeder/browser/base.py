"""
Fetch capability interface shared by the browser and HTTP engines.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager

from ..models import FetchResponse, SeederConfig
from ..utils import get_logger


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'DNT': '1',
    'Upgrade-Insecure-Requests': '1',
}


class BaseFetcher(ABC):
    """
    A run-scoped handle that retrieves pages.

    Acquire it once with `async with`; it is released on every exit path.
    `start()` raises CapabilityInitError when the backend cannot be created.
    """

    def __init__(self, config: SeederConfig):
        self.config = config
        self.logger = get_logger()

    @property
    def user_agent(self) -> str:
        return self.config.user_agent or DEFAULT_USER_AGENT

    @abstractmethod
    async def start(self):
        """Acquire the underlying resources."""

    @abstractmethod
    async def stop(self):
        """Release the underlying resources. Safe to call more than once."""

    @abstractmethod
    async def fetch(self, url: str, timeout_ms: int) -> FetchResponse:
        """
        Retrieve a URL.

        Args:
            url: Absolute URL to load
            timeout_ms: Timeout for this fetch only

        Returns:
            FetchResponse with status and document content

        Raises:
            FetchError: on timeout or transport failure
        """

    @asynccontextmanager
    async def site_session(self, site_url: str):
        """
        Scope for one site's fetches.
        Engines holding per-site state (a browser page) override this.
        """
        yield self

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
