"""Exceptions raised by sitemd."""

from typing import Optional


class SitemdError(Exception):
    """Base class for sitemd errors."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.message = message
        self.url = url
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.url:
            return f"{self.url}: {self.message}"
        return self.message


class FetchError(SitemdError):
    """A document could not be retrieved. Recoverable."""


class SitemapParseError(SitemdError):
    """A sitemap document is not well-formed XML. Aborts discovery."""

    def _format_message(self) -> str:
        if self.url:
            return f"Failed to parse sitemap at '{self.url}': {self.message}"
        return f"Sitemap parse error: {self.message}"
