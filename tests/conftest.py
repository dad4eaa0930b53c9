"""
Pytest configuration and fixtures for VDP seeder tests.
"""

from contextlib import asynccontextmanager
from typing import Dict, List, Union

import pytest

from vdp_seeder.browser import BaseFetcher
from vdp_seeder.errors import FetchError
from vdp_seeder.models import FetchResponse, SeederConfig


HOMEPAGE_HTML = "<html><head><title>Example Motors</title></head><body>Welcome</body></html>"
BLOCKED_HTML = "<html><head><title>403 Forbidden</title></head><body>Access denied</body></html>"

PRIMARY_PATH = "/dealer-inspire-inventory/inventory_sitemap.xml"


def urlset(*locs: str) -> str:
    """Build a minimal sitemap listing the given locations."""
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{entries}</urlset>"
    )


class FakeFetcher(BaseFetcher):
    """
    Scripted fetch capability.
    Unknown URLs answer 404 with an empty body.
    """

    def __init__(self, config: SeederConfig, routes: Dict[str, Union[FetchResponse, Exception, str]] = None):
        super().__init__(config)
        self.routes = dict(routes or {})
        self.calls: List[str] = []
        self.timeouts: Dict[str, int] = {}
        self.started = 0
        self.stopped = 0
        self.sessions: List[str] = []
        self.open_sessions = 0

    def add(self, url: str, content: str = "", status: int = 200):
        self.routes[url] = FetchResponse(url=url, status=status, content=content)

    def fail(self, url: str, reason: str = "timeout"):
        self.routes[url] = FetchError(url, reason)

    async def start(self):
        self.started += 1

    async def stop(self):
        self.stopped += 1

    @asynccontextmanager
    async def site_session(self, site_url: str):
        self.sessions.append(site_url)
        self.open_sessions += 1
        try:
            yield self
        finally:
            self.open_sessions -= 1

    async def fetch(self, url: str, timeout_ms: int) -> FetchResponse:
        self.calls.append(url)
        self.timeouts[url] = timeout_ms

        route = self.routes.get(url)
        if route is None:
            return FetchResponse(url=url, status=404, content="")
        if isinstance(route, Exception):
            raise route
        return route


class SleepRecorder:
    """Stand-in for asyncio.sleep that only records delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float):
        self.delays.append(seconds)


@pytest.fixture
def config(tmp_path) -> SeederConfig:
    """Config with no inter-site delay and files under tmp_path."""
    return SeederConfig(
        input_file=str(tmp_path / "sites.txt"),
        output_file=str(tmp_path / "out" / "vdp.txt"),
        delay_seconds=0,
    )


@pytest.fixture
def fetcher(config) -> FakeFetcher:
    return FakeFetcher(config)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()
