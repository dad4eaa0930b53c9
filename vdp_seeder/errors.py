"""
Exception types raised while seeding VDP URLs.
"""


class SeederError(Exception):
    """Base class for per-site and run-level failures."""

    kind = "error"


class SiteBlocked(SeederError):
    """Homepage looks like a block page."""

    kind = "blocked"


class FetchError(SeederError):
    """A single fetch timed out or failed at the transport layer."""

    kind = "fetch"

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class NotFound(SeederError):
    """No sitemap candidate validated."""

    kind = "not_found"


class EmptyFeed(SeederError):
    """Feed located but it lists no page locations."""

    kind = "empty_feed"


class CapabilityInitError(SeederError):
    """The fetch backend could not be started. Fatal for the run."""

    kind = "init"
