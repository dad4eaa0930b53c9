"""
Fetch capability module.
Provides the Playwright browser engine and a plain HTTP engine.
"""

from .base import BaseFetcher
from .manager import BrowserManager
from .http import HttpFetcher
from .robotstxt import RobotsTxtReader
from ..models import FetchEngine, SeederConfig


def create_fetcher(config: SeederConfig) -> BaseFetcher:
    """Build the fetch capability selected by the config."""
    if config.engine == FetchEngine.HTTP:
        return HttpFetcher(config)
    return BrowserManager(config)


__all__ = [
    'BaseFetcher',
    'BrowserManager',
    'HttpFetcher',
    'RobotsTxtReader',
    'create_fetcher',
]
