"""
Pick a representative vehicle detail page out of an inventory feed.
"""

from typing import Optional

from .feed import FeedParser
from ..models import FeedDocument
from ..utils import get_logger


class VDPExtractor:
    """Returns the first page location listed in a feed."""

    def __init__(self):
        self.logger = get_logger()

    def extract(self, feed: FeedDocument) -> Optional[str]:
        """
        Extract the first VDP URL from a feed.

        Args:
            feed: Validated feed document

        Returns:
            The first `loc` value in document order, or None when the feed
            lists nothing
        """
        vdp_url = FeedParser(feed.content).first_location()

        if vdp_url is None:
            self.logger.debug(f"No <loc> entries in {feed.source_url}")

        return vdp_url
