"""
URL validation helpers.
"""

from .patterns import SITE_URL_PATTERN


class URLValidator:
    """Validates and builds site URLs."""

    @staticmethod
    def is_site_url(value: str) -> bool:
        """Check that a value starts with http:// or https://."""
        if not value:
            return False
        return bool(SITE_URL_PATTERN.match(value))

    @staticmethod
    def join_path(base_url: str, path: str) -> str:
        """Append an absolute path to a base URL."""
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
