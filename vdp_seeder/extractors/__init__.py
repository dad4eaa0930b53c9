"""
Feed parsing and VDP extraction.
"""

from .feed import FeedParser
from .vdp import VDPExtractor

__all__ = [
    'FeedParser',
    'VDPExtractor',
]
