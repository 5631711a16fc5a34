"""Data models for sitemd."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional


class ReferenceKind(Enum):
    """Kind of a URL found inside a sitemap ``<loc>`` element."""

    INDEX = "index"
    PAGE = "page"


class TagKind(Enum):
    """Tags the single-slot converter recognizes."""

    H1 = "h1"
    H2 = "h2"
    P = "p"
    LI = "li"
    A = "a"
    IMG = "img"
    STRONG = "strong"
    EM = "em"
    BLOCKQUOTE = "blockquote"


class DiscoveryBranch(Enum):
    """Branch of the discovery fallback chain that produced the URL set."""

    ROBOTS = "robots"
    GUESSED_SITEMAP = "guessed_sitemap"
    NATIVE_CRAWL = "native_crawl"


class ScrapeStatus(Enum):
    """Status of a single page."""

    SUCCESS = "success"
    FAILED = "failed"


class EventLevel(Enum):
    """Severity of a pipeline event."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class EventKind(Enum):
    """Points in the pipeline that report progress."""

    ROBOTS_FETCHED = "robots_fetched"
    ROBOTS_FETCH_FAILED = "robots_fetch_failed"
    SITEMAP_EXPANDED = "sitemap_expanded"
    SITEMAP_FETCH_FAILED = "sitemap_fetch_failed"
    SITEMAP_SKIPPED = "sitemap_skipped"
    BRANCH_SELECTED = "branch_selected"
    CRAWL_STARTED = "crawl_started"
    PAGE_SAVED = "page_saved"
    PAGE_FAILED = "page_failed"


@dataclass(frozen=True)
class SiteRoot:
    """A normalized site origin, without trailing slash."""

    url: str

    @classmethod
    def from_url(cls, url: str) -> "SiteRoot":
        return cls(url.strip().rstrip("/"))

    def join(self, path: str) -> str:
        """Build ``<root>/<path>``."""
        return f"{self.url}/{path.lstrip('/')}"

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class SitemapReference:
    """A URL taken from a sitemap, classified by its suffix."""

    url: str

    @property
    def kind(self) -> ReferenceKind:
        if self.url.endswith(".xml"):
            return ReferenceKind.INDEX
        return ReferenceKind.PAGE


class DiscoveredUrlSet:
    """Set of page URLs that keeps first-discovery order."""

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls: dict[str, None] = {}
        for url in urls:
            self.add(url)

    def add(self, url: str) -> bool:
        """Insert a URL.

        Returns:
            True if the URL was new, False for a duplicate.
        """
        if url in self._urls:
            return False
        self._urls[url] = None
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __bool__(self) -> bool:
        return bool(self._urls)

    def __repr__(self) -> str:
        return f"DiscoveredUrlSet({list(self._urls)!r})"

    def to_list(self) -> list[str]:
        return list(self._urls)


@dataclass(frozen=True)
class CrawlConfig:
    """Configuration for a native link-following crawl."""

    depth: int = 3
    delay_ms: int = 100


@dataclass
class ScrapeConfig:
    """Configuration for a scrape run."""

    base_url: str
    output_dir: Path = Path("output")
    crawl_depth: int = 3
    crawl_delay_ms: int = 100
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 0.5
    max_pages: int = 0  # 0 = unlimited
    converter: str = "single"
    verbose: bool = False
    quiet: bool = False

    @property
    def crawl_config(self) -> CrawlConfig:
        return CrawlConfig(depth=self.crawl_depth, delay_ms=self.crawl_delay_ms)


@dataclass
class DiscoveryResult:
    """Outcome of URL discovery."""

    branch: DiscoveryBranch
    urls: DiscoveredUrlSet
    sitemap_urls: list[str] = field(default_factory=list)


@dataclass
class DocumentPage:
    """A converted page."""

    url: str
    content_markdown: str
    filepath: Optional[Path] = None
    converted_at: datetime = field(default_factory=datetime.now)


@dataclass
class CrawlResult:
    """Result of fetching, converting and saving a single URL."""

    url: str
    status: ScrapeStatus
    page: Optional[DocumentPage] = None
    error: Optional[str] = None
    duration_ms: float = 0.0


@dataclass
class ScrapeReport:
    """Summary of a scrape run."""

    base_url: str
    branch: DiscoveryBranch
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_urls: int = 0
    successful: int = 0
    failed: int = 0
    pages: list[dict[str, Any]] = field(default_factory=list)
    failed_urls: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "base_url": self.base_url,
            "branch": self.branch.value,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "stats": {
                "total_urls": self.total_urls,
                "successful": self.successful,
                "failed": self.failed,
            },
            "pages": self.pages,
            "failed_urls": self.failed_urls,
        }


@dataclass(frozen=True)
class PipelineEvent:
    """A structured diagnostic emitted at a defined pipeline point."""

    kind: EventKind
    message: str
    level: EventLevel = EventLevel.INFO
    url: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)
