"""
Robots.txt reader.
Collects Sitemap directives for diagnostics; never blocks discovery.
"""

from typing import List
from urllib.robotparser import RobotFileParser

from .base import BaseFetcher
from ..errors import FetchError
from ..extractors import FeedParser
from ..utils import URLValidator, get_logger
from ..utils.patterns import ROBOTS_PATH


class RobotsTxtReader:
    """Best-effort robots.txt lookup through the run's fetch capability."""

    def __init__(self, timeout_ms: int = 15000):
        self.timeout_ms = timeout_ms
        self.logger = get_logger()

    async def sitemaps(self, fetcher: BaseFetcher, site_root: str) -> List[str]:
        """
        Fetch robots.txt and return the sitemap URLs it declares.

        Returns an empty list when robots.txt is missing or unreachable.
        """
        robots_url = URLValidator.join_path(site_root, ROBOTS_PATH)

        try:
            response = await fetcher.fetch(robots_url, self.timeout_ms)
        except FetchError as e:
            self.logger.debug(f"Could not access robots.txt: {e.reason}")
            return []

        if response.status != 200:
            self.logger.debug(f"HTTP {response.status} fetching {robots_url}")
            return []

        return self.parse_sitemaps(response.content)

    @staticmethod
    def parse_sitemaps(content: str) -> List[str]:
        """Extract Sitemap directives from raw or browser-wrapped robots.txt."""
        # Browsers wrap plain text in <pre>; unwrap before parsing
        text = FeedParser(content).text() if '<' in content else content

        parser = RobotFileParser()
        parser.parse(text.splitlines())
        return list(parser.site_maps() or [])
