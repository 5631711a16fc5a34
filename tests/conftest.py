"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Optional

import pytest

from sitemd.core.errors import FetchError
from sitemd.core.interfaces import EventSink, Fetcher
from sitemd.core.models import CrawlConfig, EventKind, PipelineEvent


class FakeFetcher(Fetcher):
    """In-memory fetcher serving documents from a dict."""

    def __init__(
        self,
        documents: Optional[dict[str, str]] = None,
        crawl_links: Optional[list[str]] = None,
    ) -> None:
        self.documents = documents or {}
        self.crawl_links = crawl_links or []
        self.fetched: list[str] = []
        self.crawls: list[tuple[str, CrawlConfig]] = []

    async def __aenter__(self) -> "FakeFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        pass

    async def fetch(self, url: str, depth: int = 0) -> str:
        self.fetched.append(url)
        if url not in self.documents:
            raise FetchError("not found", url=url)
        return self.documents[url]

    async def crawl(self, root: str, config: CrawlConfig) -> list[str]:
        self.crawls.append((root, config))
        return list(self.crawl_links)


class RecordingEventSink(EventSink):
    """Collect emitted events for assertions."""

    def __init__(self) -> None:
        self.events: list[PipelineEvent] = []

    def emit(self, event: PipelineEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[EventKind]:
        return [event.kind for event in self.events]


def urlset(*locs: str) -> str:
    """Build a sitemap document listing the given locations."""
    entries = "\n".join(f"  <url><loc>{loc}</loc></url>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}\n"
        "</urlset>\n"
    )


def sitemapindex(*locs: str) -> str:
    """Build a sitemap index document referencing the given sitemaps."""
    entries = "\n".join(f"  <sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}\n"
        "</sitemapindex>\n"
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def events():
    """Event sink that records everything."""
    return RecordingEventSink()


@pytest.fixture
def sample_html():
    """Sample HTML content for testing."""
    return """<!DOCTYPE html>
<html>
<head><title>Test Page</title></head>
<body>
<h1>Test Page Title</h1>
<p>This is some test content.</p>
<ul><li>First</li><li>Second</li></ul>
<blockquote>Quoted</blockquote>
</body>
</html>
"""
