"""Core models and interfaces for sitemd."""

from sitemd.core.errors import FetchError, SitemapParseError, SitemdError
from sitemd.core.interfaces import (
    DocumentConverter,
    EventSink,
    Fetcher,
    StorageBackend,
)
from sitemd.core.models import (
    CrawlConfig,
    CrawlResult,
    DiscoveredUrlSet,
    DiscoveryBranch,
    DiscoveryResult,
    DocumentPage,
    EventKind,
    EventLevel,
    PipelineEvent,
    ReferenceKind,
    ScrapeConfig,
    ScrapeReport,
    ScrapeStatus,
    SiteRoot,
    SitemapReference,
    TagKind,
)

__all__ = [
    "CrawlConfig",
    "CrawlResult",
    "DiscoveredUrlSet",
    "DiscoveryBranch",
    "DiscoveryResult",
    "DocumentPage",
    "EventKind",
    "EventLevel",
    "PipelineEvent",
    "ReferenceKind",
    "ScrapeConfig",
    "ScrapeReport",
    "ScrapeStatus",
    "SiteRoot",
    "SitemapReference",
    "TagKind",
    "DocumentConverter",
    "EventSink",
    "Fetcher",
    "StorageBackend",
    "FetchError",
    "SitemapParseError",
    "SitemdError",
]
