"""
Inventory sitemap discovery.
Tries a fixed, ordered list of sitemap locations and returns the first valid feed.
"""

from typing import List, Optional, Tuple

from .browser import BaseFetcher, RobotsTxtReader
from .errors import FetchError, NotFound, SiteBlocked
from .extractors import FeedParser
from .models import FeedDocument, FetchResponse, SeederConfig, SitemapCandidate, SiteDescriptor
from .utils import URLValidator, get_logger
from .utils.patterns import (
    PRIMARY_SITEMAP_PATH,
    FALLBACK_SITEMAP_PATHS,
    BLOCK_TITLE_MARKERS,
    CONTENT_PREVIEW_CHARS,
    MAX_HOMEPAGE_SITEMAP_REFS,
)


def build_candidates() -> List[SitemapCandidate]:
    """The candidate order: the inventory feed first, then generic sitemaps."""
    candidates = [
        SitemapCandidate(path=PRIMARY_SITEMAP_PATH, priority=0, requires_inventory_match=False)
    ]
    for priority, path in enumerate(FALLBACK_SITEMAP_PATHS, start=1):
        candidates.append(SitemapCandidate(path=path, priority=priority))
    return candidates


SITEMAP_CANDIDATES: Tuple[SitemapCandidate, ...] = tuple(build_candidates())


def is_block_page(title: str) -> bool:
    """Homepage title heuristic for a bot-protection block page."""
    return any(marker in title for marker in BLOCK_TITLE_MARKERS)


class SitemapLocator:
    """
    Finds the inventory sitemap for a dealer site.

    Steps, in order:
    1. Load the homepage (session warm-up). A block page aborts the site.
    2. Read robots.txt, for diagnostics only.
    3. Try each candidate in priority order; the first one that validates wins.
    """

    def __init__(self, config: SeederConfig, candidates: Optional[List[SitemapCandidate]] = None):
        self.config = config
        if candidates is None:
            candidates = SITEMAP_CANDIDATES
        self.candidates = sorted(candidates, key=lambda c: c.priority)
        self.robots = RobotsTxtReader(timeout_ms=config.robots_timeout_ms)
        self.logger = get_logger()

    async def locate(self, site: SiteDescriptor, fetcher: BaseFetcher) -> FeedDocument:
        """
        Locate a valid feed for a site.

        Args:
            site: Site to search
            fetcher: The run's fetch capability

        Returns:
            FeedDocument of the first candidate that validated

        Raises:
            SiteBlocked: homepage is a block page
            FetchError: homepage could not be loaded
            NotFound: every candidate failed
        """
        await self._warm_up(site, fetcher)

        robots_sitemaps = await self.robots.sitemaps(fetcher, site.root)
        if robots_sitemaps:
            self.logger.debug(f"Found sitemaps in robots.txt: {', '.join(robots_sitemaps)}")

        for candidate in self.candidates:
            feed = await self._try_candidate(site, candidate, fetcher)
            if feed is not None:
                return feed

        raise NotFound(f"No accessible sitemap found for {site.base_url}")

    async def _warm_up(self, site: SiteDescriptor, fetcher: BaseFetcher):
        """Visit the homepage and fail fast on a block page."""
        self.logger.debug(f"Visiting main page {site.base_url}")

        response = await fetcher.fetch(site.base_url, self.config.homepage_timeout_ms)
        page = FeedParser(response.content)
        title = page.title()

        if is_block_page(title):
            raise SiteBlocked(f"Main page blocked ({title!r})")

        self.logger.info(f"Main page loaded: {title or '(no title)'}")

        if self.config.verbose:
            refs = page.sitemap_links(limit=MAX_HOMEPAGE_SITEMAP_REFS)
            if refs:
                self.logger.debug(f"Found sitemap references in main page: {', '.join(refs)}")

    async def _try_candidate(
        self,
        site: SiteDescriptor,
        candidate: SitemapCandidate,
        fetcher: BaseFetcher
    ) -> Optional[FeedDocument]:
        """Fetch one candidate. Returns None on any failure."""
        url = URLValidator.join_path(site.root, candidate.path)
        timeout_ms = (
            self.config.fallback_timeout_ms
            if candidate.requires_inventory_match
            else self.config.primary_timeout_ms
        )

        self.logger.debug(f"Checking sitemap: {url}")

        try:
            response = await fetcher.fetch(url, timeout_ms)
        except FetchError as e:
            self.logger.debug(f"Sitemap path {candidate.path} failed: {e.reason}")
            return None

        if not self._is_valid(response, candidate):
            return None

        self.logger.info(f"Found sitemap: {url}")
        return FeedDocument(source_url=url, content=response.content)

    def _is_valid(self, response: FetchResponse, candidate: SitemapCandidate) -> bool:
        """Status 200, a feed root, and (for fallbacks) an inventory keyword."""
        if response.status != 200:
            self.logger.debug(f"Sitemap returned status: {response.status}")
            return False

        if self.config.verbose:
            self.logger.debug(f"Content preview: {response.content[:CONTENT_PREVIEW_CHARS]}...")

        feed = FeedParser(response.content)

        if not feed.has_feed_root():
            self.logger.debug(f"{candidate.path} is accessible but holds no XML sitemap")
            return False

        if candidate.requires_inventory_match and not feed.mentions_inventory():
            self.logger.debug(f"{candidate.path} is a sitemap without inventory content")
            return False

        return True
