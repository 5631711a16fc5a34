"""Recursive expansion of sitemaps and sitemap indexes."""

import xml.etree.ElementTree as ET
from collections import deque
from typing import Iterable, Optional

from sitemd.core.errors import FetchError, SitemapParseError
from sitemd.core.interfaces import EventSink, Fetcher
from sitemd.core.models import (
    DiscoveredUrlSet,
    EventKind,
    EventLevel,
    PipelineEvent,
    ReferenceKind,
    SitemapReference,
)
from sitemd.events import NullEventSink


def _local_name(tag: str) -> str:
    """Strip an ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def parse_sitemap(content: str, sitemap_url: Optional[str] = None) -> list[SitemapReference]:
    """Read every ``<loc>`` value from a sitemap document, in document order.

    Args:
        content: XML content.
        sitemap_url: Source URL, used in error messages.

    Returns:
        Classified references; empty ``<loc>`` elements are skipped.

    Raises:
        SitemapParseError: If the document is not well-formed XML.
    """
    references: list[SitemapReference] = []
    parser = ET.XMLPullParser(events=("start", "end"))
    in_loc = False

    try:
        parser.feed(content.lstrip("\ufeff").lstrip())
        parser.close()
    except ET.ParseError as e:
        raise SitemapParseError(str(e), url=sitemap_url) from e

    for event, elem in parser.read_events():
        if _local_name(elem.tag) != "loc":
            continue
        if event == "start":
            in_loc = True
        elif in_loc:
            in_loc = False
            url = (elem.text or "").strip()
            if url:
                references.append(SitemapReference(url))

    return references


class SitemapIndexer:
    """Expand sitemap URLs into the page URLs they reference.

    Nested sitemaps (``<loc>`` values ending in ``.xml``) are followed
    with a worklist. Every sitemap URL is fetched at most once, so
    cyclic sitemap graphs terminate.
    """

    def __init__(self, fetcher: Fetcher, events: Optional[EventSink] = None) -> None:
        """Initialize the indexer.

        Args:
            fetcher: Fetcher used to retrieve sitemap documents.
            events: Sink for progress and warning events.
        """
        self._fetcher = fetcher
        self._events = events or NullEventSink()

    async def expand_all(self, sitemap_urls: Iterable[str]) -> DiscoveredUrlSet:
        """Expand several sitemaps into one URL set.

        Args:
            sitemap_urls: Sitemap URLs to expand, in order.

        Returns:
            Page URLs in first-discovery order.

        Raises:
            SitemapParseError: If any reached sitemap is malformed.
        """
        urls = DiscoveredUrlSet()
        visited: set[str] = set()
        for sitemap_url in sitemap_urls:
            await self.expand(sitemap_url, urls, visited)
        return urls

    async def expand(
        self,
        sitemap_url: str,
        urls: DiscoveredUrlSet,
        visited: Optional[set[str]] = None,
    ) -> None:
        """Expand one sitemap and everything it references into ``urls``.

        Args:
            sitemap_url: Sitemap or sitemap index URL.
            urls: Accumulator for page URLs.
            visited: Sitemap URLs already expanded. Updated in place.

        Raises:
            SitemapParseError: If any reached sitemap is malformed.
        """
        if visited is None:
            visited = set()

        queue: deque[str] = deque([sitemap_url])

        while queue:
            current = queue.popleft()

            if current in visited:
                self._events.emit(
                    PipelineEvent(
                        kind=EventKind.SITEMAP_SKIPPED,
                        message=f"Skipping already expanded sitemap {current}",
                        url=current,
                    )
                )
                continue

            visited.add(current)

            try:
                content = await self._fetcher.fetch(current, depth=0)
            except FetchError as e:
                self._events.emit(
                    PipelineEvent(
                        kind=EventKind.SITEMAP_FETCH_FAILED,
                        level=EventLevel.WARNING,
                        message=f"Failed to fetch sitemap {current}: {e.message}",
                        url=current,
                    )
                )
                continue

            added = 0
            nested = 0
            for reference in parse_sitemap(content, current):
                if reference.kind is ReferenceKind.INDEX:
                    queue.append(reference.url)
                    nested += 1
                elif urls.add(reference.url):
                    added += 1

            self._events.emit(
                PipelineEvent(
                    kind=EventKind.SITEMAP_EXPANDED,
                    message=f"Found {added} URLs and {nested} nested sitemaps in {current}",
                    url=current,
                    data={"added": added, "nested": nested},
                )
            )
