"""Abstract interfaces for sitemd."""

from abc import ABC, abstractmethod
from pathlib import Path

from sitemd.core.models import CrawlConfig, DocumentPage, PipelineEvent


class Fetcher(ABC):
    """Retrieves documents and performs native crawls."""

    @abstractmethod
    async def fetch(self, url: str, depth: int = 0) -> str:
        """Fetch a single document.

        Args:
            url: URL to fetch.
            depth: Link depth to follow; 0 means this document only.

        Returns:
            Document text.

        Raises:
            FetchError: If the document could not be retrieved.
        """
        ...

    @abstractmethod
    async def crawl(self, root: str, config: CrawlConfig) -> list[str]:
        """Follow links from ``root`` and return the pages found.

        Args:
            root: URL to start from.
            config: Crawl depth and politeness delay.

        Returns:
            Discovered page URLs.
        """
        ...


class DocumentConverter(ABC):
    """Converts one page's markup to Markdown."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the converter name."""
        ...

    @abstractmethod
    def convert(self, markup: str) -> str:
        """Convert markup to a Markdown string."""
        ...


class StorageBackend(ABC):
    """Persists converted pages."""

    @abstractmethod
    def url_to_filepath(self, url: str) -> Path:
        """Return the local path a URL is stored under."""
        ...

    @abstractmethod
    async def save_page(self, page: DocumentPage, filepath: Path) -> None:
        """Save a page.

        Args:
            page: Page to save.
            filepath: Target filepath.
        """
        ...


class EventSink(ABC):
    """Receives structured pipeline events."""

    @abstractmethod
    def emit(self, event: PipelineEvent) -> None:
        """Handle one event."""
        ...
