"""
sitemd - Discover every page of a site and convert it to Markdown.

Pages are discovered from robots.txt sitemap directives, a guessed
/sitemap.xml, or a native crawl, then converted one by one.

Usage:
    sitemd https://example.com
    sitemd scrape https://example.com -o ./pages
"""

__version__ = "0.1.0"

from sitemd.core.errors import FetchError, SitemapParseError, SitemdError
from sitemd.core.interfaces import (
    DocumentConverter,
    EventSink,
    Fetcher,
    StorageBackend,
)
from sitemd.core.models import (
    CrawlConfig,
    DiscoveredUrlSet,
    DiscoveryBranch,
    DiscoveryResult,
    PipelineEvent,
    ScrapeConfig,
    ScrapeReport,
    SiteRoot,
)

__all__ = [
    "__version__",
    # Models
    "CrawlConfig",
    "DiscoveredUrlSet",
    "DiscoveryBranch",
    "DiscoveryResult",
    "PipelineEvent",
    "ScrapeConfig",
    "ScrapeReport",
    "SiteRoot",
    # Interfaces
    "DocumentConverter",
    "EventSink",
    "Fetcher",
    "StorageBackend",
    # Errors
    "FetchError",
    "SitemapParseError",
    "SitemdError",
]
