"""Fallback chain that selects how a site's pages are discovered."""

from typing import Optional

from sitemd.core.interfaces import EventSink, Fetcher
from sitemd.core.models import (
    CrawlConfig,
    DiscoveredUrlSet,
    DiscoveryBranch,
    DiscoveryResult,
    EventKind,
    PipelineEvent,
    SiteRoot,
)
from sitemd.discovery.robots import RobotsResolver
from sitemd.discovery.sitemap import SitemapIndexer
from sitemd.events import NullEventSink

GUESSED_SITEMAP_PATH = "sitemap.xml"


class DiscoveryOrchestrator:
    """Discover page URLs, trying each source in turn.

    1. Sitemaps declared in robots.txt. If any are declared, their
       expansion is final, even when it yields no pages.
    2. ``<root>/sitemap.xml``, if it yields at least one page.
    3. A native crawl from the root.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        events: Optional[EventSink] = None,
        crawl_config: Optional[CrawlConfig] = None,
    ) -> None:
        self._fetcher = fetcher
        self._events = events or NullEventSink()
        self._crawl_config = crawl_config or CrawlConfig()
        self._robots = RobotsResolver(fetcher, self._events)
        self._indexer = SitemapIndexer(fetcher, self._events)

    async def discover(self, root: SiteRoot) -> DiscoveryResult:
        """Discover the page URLs of a site.

        Raises:
            SitemapParseError: If a reached sitemap is malformed.
        """
        sitemap_urls = await self._robots.resolve(root)
        if sitemap_urls:
            urls = await self._indexer.expand_all(sitemap_urls)
            return self._select(DiscoveryBranch.ROBOTS, urls, sitemap_urls)

        guessed = [root.join(GUESSED_SITEMAP_PATH)]
        urls = await self._indexer.expand_all(guessed)
        if urls:
            return self._select(DiscoveryBranch.GUESSED_SITEMAP, urls, guessed)

        self._events.emit(
            PipelineEvent(
                kind=EventKind.CRAWL_STARTED,
                message=(
                    f"No sitemap pages found, crawling {root} "
                    f"(depth={self._crawl_config.depth}, delay={self._crawl_config.delay_ms}ms)"
                ),
                url=root.url,
            )
        )
        links = await self._fetcher.crawl(root.url, self._crawl_config)
        return self._select(DiscoveryBranch.NATIVE_CRAWL, DiscoveredUrlSet(links), [])

    def _select(
        self,
        branch: DiscoveryBranch,
        urls: DiscoveredUrlSet,
        sitemap_urls: list[str],
    ) -> DiscoveryResult:
        self._events.emit(
            PipelineEvent(
                kind=EventKind.BRANCH_SELECTED,
                message=f"Using {branch.value} discovery: {len(urls)} URLs",
                data={"branch": branch.value, "count": len(urls)},
            )
        )
        return DiscoveryResult(branch=branch, urls=urls, sitemap_urls=sitemap_urls)
