"""
Tolerant reader for sitemap feeds and homepage markup.
"""

import warnings
from typing import List, Optional
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from ..utils.patterns import (
    FEED_ROOT_TAGS,
    LOCATION_TAG,
    INVENTORY_KEYWORDS,
)


class FeedParser:
    """
    Parses fetched content once and answers questions about it.

    Uses lxml's HTML parser so that XML sitemaps, sitemaps wrapped by a
    browser's XML viewer, and ordinary HTML pages all tokenize without
    raising. Tag names come out lowercased, namespace prefixes stay part of
    the name (so `image:loc` never matches `loc`).
    """

    def __init__(self, content: str):
        self.content = content or ""
        with warnings.catch_warnings():
            # Sitemaps are XML read through the HTML parser
            warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
            self.soup = BeautifulSoup(self.content, 'lxml')

    def has_feed_root(self) -> bool:
        """Check for a `urlset` or `sitemapindex` element."""
        return self.soup.find(list(FEED_ROOT_TAGS)) is not None

    def mentions_inventory(self) -> bool:
        """Check whether any inventory keyword appears in the document, case-sensitively."""
        return any(keyword in self.content for keyword in INVENTORY_KEYWORDS)

    def first_location(self) -> Optional[str]:
        """Text of the first `loc` element in document order, None if absent or blank."""
        loc = self.soup.find(LOCATION_TAG)
        if loc is None:
            return None
        return loc.get_text(strip=True) or None

    def title(self) -> str:
        """Page title, or an empty string when there is none."""
        if self.soup.title is None:
            return ""
        return self.soup.title.get_text(strip=True)

    def text(self) -> str:
        """Visible text, used for plain-text documents like robots.txt."""
        return self.soup.get_text("\n")

    def sitemap_links(self, limit: Optional[int] = None) -> List[str]:
        """Hrefs that point at a sitemap XML file."""
        links = []
        for tag in self.soup.find_all(href=True):
            href = tag['href']
            lowered = href.lower()
            if 'sitemap' in lowered and lowered.endswith('.xml') and href not in links:
                links.append(href)
                if limit is not None and len(links) >= limit:
                    break
        return links
