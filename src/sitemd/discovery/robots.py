"""Sitemap discovery from robots.txt directives."""

from typing import Optional

from sitemd.core.errors import FetchError
from sitemd.core.interfaces import EventSink, Fetcher
from sitemd.core.models import EventKind, EventLevel, PipelineEvent, SiteRoot
from sitemd.events import NullEventSink

SITEMAP_DIRECTIVE = "sitemap:"


def parse_robots_txt(content: str) -> list[str]:
    """Extract ``Sitemap:`` directive values from robots.txt content.

    The directive is matched case-insensitively after leading whitespace.
    Declaration order is kept.
    """
    sitemap_urls: list[str] = []
    for line in content.splitlines():
        stripped = line.lstrip()
        if not stripped.lower().startswith(SITEMAP_DIRECTIVE):
            continue
        value = stripped[len(SITEMAP_DIRECTIVE):].strip()
        if value:
            sitemap_urls.append(value)
    return sitemap_urls


class RobotsResolver:
    """Read the sitemap URLs a site declares in its robots.txt."""

    def __init__(self, fetcher: Fetcher, events: Optional[EventSink] = None) -> None:
        self._fetcher = fetcher
        self._events = events or NullEventSink()

    async def resolve(self, root: SiteRoot) -> list[str]:
        """Fetch ``<root>/robots.txt`` and return its sitemap URLs.

        A failed fetch is reported as a warning and yields an empty list.
        """
        robots_url = root.join("robots.txt")

        try:
            content = await self._fetcher.fetch(robots_url, depth=0)
        except FetchError as e:
            self._events.emit(
                PipelineEvent(
                    kind=EventKind.ROBOTS_FETCH_FAILED,
                    level=EventLevel.WARNING,
                    message=f"Failed to fetch robots.txt for {robots_url}: {e.message}",
                    url=robots_url,
                )
            )
            return []

        sitemap_urls = parse_robots_txt(content)
        self._events.emit(
            PipelineEvent(
                kind=EventKind.ROBOTS_FETCHED,
                message=f"Found {len(sitemap_urls)} sitemap(s) in {robots_url}",
                url=robots_url,
                data={"sitemaps": sitemap_urls},
            )
        )
        return sitemap_urls
