"""
Site list parsing.
Turns `<url>` / `<url>|<label>` lines into site descriptors.
"""

from pathlib import Path
from typing import Iterable, List

from .models import SiteDescriptor
from .utils import URLValidator, get_logger
from .utils.patterns import LABEL_DELIMITER, DEFAULT_LABEL


class SiteListParser:
    """Parse dealer site lines, skipping anything that isn't a web URL."""

    def __init__(self):
        self.logger = get_logger()

    def parse_line(self, line: str):
        """Parse a single line. Returns None for blank or non-URL lines."""
        # The scheme must open the line; indented lines are not sites
        line = line.rstrip("\r\n")
        if not URLValidator.is_site_url(line):
            return None
        line = line.strip()

        url, _, label = line.partition(LABEL_DELIMITER)
        # Only the first delimiter separates the label
        label = label.split(LABEL_DELIMITER, 1)[0].strip()

        return SiteDescriptor(base_url=url.strip(), label=label or DEFAULT_LABEL)

    def parse_lines(self, lines: Iterable[str]) -> List[SiteDescriptor]:
        """Parse lines in order, dropping the ones that don't describe a site."""
        sites = []
        skipped = 0

        for line in lines:
            site = self.parse_line(line)
            if site is None:
                if line.strip():
                    skipped += 1
                continue
            sites.append(site)

        if skipped:
            self.logger.debug(f"Skipped {skipped} non-URL line(s)")

        return sites

    def parse(self, text: str) -> List[SiteDescriptor]:
        """Parse a whole site list."""
        return self.parse_lines(text.splitlines())


def load_site_list(file_path: str) -> List[SiteDescriptor]:
    """Read and parse a site list file."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Site list not found: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        return SiteListParser().parse(f.read())
