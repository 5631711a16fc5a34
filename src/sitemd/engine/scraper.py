"""Scrape pipeline: discover URLs, then fetch, convert and save each page."""

import time
from datetime import datetime
from typing import AsyncIterator, Optional

from sitemd.core.interfaces import DocumentConverter, EventSink, Fetcher, StorageBackend
from sitemd.core.models import (
    CrawlResult,
    DiscoveryResult,
    DocumentPage,
    EventKind,
    EventLevel,
    PipelineEvent,
    ScrapeConfig,
    ScrapeReport,
    ScrapeStatus,
    SiteRoot,
)
from sitemd.discovery.orchestrator import DiscoveryOrchestrator
from sitemd.events import NullEventSink


class SiteScraper:
    """Convert every discovered page of a site to Markdown."""

    def __init__(
        self,
        fetcher: Fetcher,
        converter: DocumentConverter,
        storage: StorageBackend,
        config: ScrapeConfig,
        events: Optional[EventSink] = None,
    ) -> None:
        """Initialize the scraper.

        Args:
            fetcher: Fetcher for robots.txt, sitemaps, pages and crawls.
            converter: Markup to Markdown converter.
            storage: Storage backend for saving pages.
            config: Scrape configuration.
            events: Sink for progress and warning events.
        """
        self._fetcher = fetcher
        self._converter = converter
        self._storage = storage
        self._config = config
        self._events = events or NullEventSink()
        self._root = SiteRoot.from_url(config.base_url)

    @property
    def root(self) -> SiteRoot:
        return self._root

    async def discover(self) -> DiscoveryResult:
        """Run URL discovery only.

        Raises:
            SitemapParseError: If a reached sitemap is malformed.
        """
        orchestrator = DiscoveryOrchestrator(
            self._fetcher,
            events=self._events,
            crawl_config=self._config.crawl_config,
        )
        return await orchestrator.discover(self._root)

    async def scrape(self) -> ScrapeReport:
        """Discover URLs, then fetch, convert and save each page.

        Pages are processed one at a time. A failure on one page is
        recorded and the run continues with the next.

        Raises:
            SitemapParseError: If a reached sitemap is malformed.
        """
        started_at = datetime.now()
        discovery = await self.discover()

        urls = discovery.urls.to_list()
        if self._config.max_pages > 0:
            urls = urls[: self._config.max_pages]

        report = ScrapeReport(
            base_url=self._root.url,
            branch=discovery.branch,
            started_at=started_at,
            total_urls=len(urls),
        )

        async for result in self._process_urls(urls):
            self._record(report, result)

        report.completed_at = datetime.now()
        return report

    async def _process_urls(self, urls: list[str]) -> AsyncIterator[CrawlResult]:
        total = len(urls)

        for i, url in enumerate(urls, 1):
            start_time = time.time()

            try:
                page = await self._process_url(url)
            except Exception as e:
                duration = (time.time() - start_time) * 1000
                self._events.emit(
                    PipelineEvent(
                        kind=EventKind.PAGE_FAILED,
                        level=EventLevel.ERROR,
                        message=f"[{i}/{total}] Failed {url}: {e}",
                        url=url,
                    )
                )
                yield CrawlResult(
                    url=url,
                    status=ScrapeStatus.FAILED,
                    error=str(e),
                    duration_ms=duration,
                )
                continue

            duration = (time.time() - start_time) * 1000
            self._events.emit(
                PipelineEvent(
                    kind=EventKind.PAGE_SAVED,
                    message=f"[{i}/{total}] Saved {url} -> {page.filepath}",
                    url=url,
                    data={"filepath": str(page.filepath)},
                )
            )
            yield CrawlResult(
                url=url,
                status=ScrapeStatus.SUCCESS,
                page=page,
                duration_ms=duration,
            )

    async def _process_url(self, url: str) -> DocumentPage:
        markup = await self._fetcher.fetch(url, depth=0)
        page = DocumentPage(
            url=url,
            content_markdown=self._converter.convert(markup),
            filepath=self._storage.url_to_filepath(url),
        )
        await self._storage.save_page(page, page.filepath)  # type: ignore[arg-type]
        return page

    def _record(self, report: ScrapeReport, result: CrawlResult) -> None:
        if result.status == ScrapeStatus.SUCCESS and result.page:
            report.successful += 1
            report.pages.append(
                {
                    "url": result.url,
                    "filepath": str(result.page.filepath),
                    "converted_at": result.page.converted_at.isoformat(),
                }
            )
        else:
            report.failed += 1
            report.failed_urls.append({"url": result.url, "error": result.error})
