"""
Playwright browser manager.
Owns one browser and one context for the whole run, and a fresh page per site.
"""

from contextlib import asynccontextmanager
from typing import Optional
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from .base import BaseFetcher, DEFAULT_HEADERS
from ..errors import CapabilityInitError, FetchError
from ..models import FetchResponse, SeederConfig


class BrowserManager(BaseFetcher):
    """
    Chromium-backed fetch capability.
    Cookies set while warming up on a homepage carry over to its sitemap requests.
    """

    LAUNCH_ARGS = [
        '--no-sandbox',
        '--disable-blink-features=AutomationControlled',
        '--disable-dev-shm-usage',
        '--disable-extensions',
        '--disable-plugins',
    ]

    def __init__(self, config: SeederConfig):
        super().__init__(config)

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def start(self):
        """Initialize Playwright, launch the browser and create the shared context."""
        self.logger.info("Initializing Playwright browser...")

        launch_options = {
            'headless': self.config.headless,
            'args': self.LAUNCH_ARGS,
        }
        if self.config.browser_path:
            launch_options['executable_path'] = self.config.browser_path

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(**launch_options)

            self._context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport={'width': 1920, 'height': 1080},
                locale=self.config.locale,
                timezone_id=self.config.timezone,
                extra_http_headers=DEFAULT_HEADERS,
                accept_downloads=False,
            )

        except Exception as e:
            self.logger.error(f"Failed to initialize browser: {e}")
            await self.stop()
            raise CapabilityInitError(f"Failed to initialize browser: {e}") from e

        self.logger.info(f"Browser launched (headless={self.config.headless})")

    @asynccontextmanager
    async def site_session(self, site_url: str):
        """Open a fresh page for one site and close it on every exit path."""
        if not self._context:
            raise RuntimeError("Browser not started. Call start() first.")

        try:
            self._page = await self._context.new_page()
        except PlaywrightError as e:
            raise FetchError(site_url, f"could not open page: {e}") from e

        try:
            yield self
        finally:
            await self._close_page()

    async def _close_page(self):
        if self._page:
            try:
                await self._page.close()
            except Exception as e:
                self.logger.warning(f"Error closing page: {e}")
            self._page = None

    async def stop(self):
        """Close page, context and browser, then stop Playwright."""
        await self._close_page()

        if self._context:
            try:
                await self._context.close()
            except Exception as e:
                self.logger.warning(f"Error closing context: {e}")
            self._context = None

        if self._browser:
            self.logger.info("Closing browser...")
            try:
                await self._browser.close()
            except Exception as e:
                self.logger.warning(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                self.logger.warning(f"Error stopping playwright: {e}")
            self._playwright = None

    async def fetch(self, url: str, timeout_ms: int) -> FetchResponse:
        if not self._page:
            raise RuntimeError("No open page. Fetch inside site_session().")

        self.logger.debug(f"Navigating to {url} (timeout {timeout_ms}ms)")

        try:
            response = await self._page.goto(
                url,
                wait_until='domcontentloaded',
                timeout=timeout_ms
            )
            if response is None:
                raise FetchError(url, "no response")

            content = await self._page.content()

        except PlaywrightTimeoutError as e:
            raise FetchError(url, f"timeout after {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise FetchError(url, str(e).splitlines()[0] if str(e) else "navigation failed") from e

        return FetchResponse(url=url, status=response.status, content=content)
