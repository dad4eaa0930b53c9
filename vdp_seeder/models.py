"""
Data models for the VDP seeder.
All models use Pydantic for validation and serialization.
"""

from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.patterns import SITE_URL_PATTERN, DEFAULT_LABEL


class FetchEngine(str, Enum):
    """Backend used to retrieve pages."""
    BROWSER = "browser"
    HTTP = "http"


class SiteState(str, Enum):
    """Per-site progress through a batch run."""
    PENDING = "pending"
    PROBING = "probing"
    DELAYING = "delaying"
    DONE = "done"


class SiteDescriptor(BaseModel):
    """A dealer website read from the input list."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    label: str = DEFAULT_LABEL

    @field_validator('base_url')
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        if not SITE_URL_PATTERN.match(value):
            raise ValueError(f"Site URL must start with http:// or https://: {value!r}")
        return value

    @field_validator('label')
    @classmethod
    def _default_label(cls, value: str) -> str:
        return value.strip() or DEFAULT_LABEL

    @property
    def root(self) -> str:
        """Base URL without trailing slash, ready for path joins."""
        return self.base_url.rstrip('/')


class SitemapCandidate(BaseModel):
    """A fixed location tried while searching for the inventory feed."""
    model_config = ConfigDict(frozen=True)

    path: str
    priority: int
    requires_inventory_match: bool = True


class FetchResponse(BaseModel):
    """What the fetch capability hands back for one URL."""
    url: str
    status: int
    content: str = ""


class FeedDocument(BaseModel):
    """A fetched document that passed the feed validity checks."""
    source_url: str
    content: str


class VdpRecord(BaseModel):
    """One representative vehicle detail page for a site."""
    vdp_url: str
    label: str

    @field_validator('vdp_url')
    @classmethod
    def _require_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("VDP URL must not be empty")
        return value.strip()

    def to_line(self) -> str:
        return f"{self.vdp_url}|{self.label}"


class SiteFailure(BaseModel):
    """Why a site was left out of the report."""
    site: SiteDescriptor
    kind: str
    message: str


class BatchReport(BaseModel):
    """Aggregated outcome of a batch run."""
    total_sites: int = 0
    records: List[VdpRecord] = Field(default_factory=list)
    failures: List[SiteFailure] = Field(default_factory=list)

    @property
    def succeeded_count(self) -> int:
        return len(self.records)

    @property
    def failed_count(self) -> int:
        return self.total_sites - self.succeeded_count

    def summary(self) -> str:
        return f"{self.succeeded_count}/{self.total_sites}"


class SeederConfig(BaseModel):
    """Run configuration. Built once and passed to every component."""
    model_config = ConfigDict(frozen=True)

    # Input / output
    input_file: str = "./input/stellantis.txt"
    output_file: str = "./output/stellantis-vdp-playwright.txt"

    # Fetching
    engine: FetchEngine = FetchEngine.BROWSER
    headless: bool = True
    user_agent: Optional[str] = None
    browser_path: Optional[str] = None
    locale: str = "en-US"
    timezone: str = "America/New_York"

    # Timeouts per fetch
    homepage_timeout_ms: int = 30000
    robots_timeout_ms: int = 15000
    primary_timeout_ms: int = 30000
    fallback_timeout_ms: int = 15000

    # Politeness
    delay_seconds: float = Field(default=3, ge=0)

    # Diagnostics
    verbose: bool = False
    debug_log_file: Optional[str] = None
