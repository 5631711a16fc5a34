"""Tree-based conversion that keeps nested formatting."""

import re
from typing import Optional

from bs4 import BeautifulSoup
from markdownify import markdownify as md

from sitemd.core.interfaces import DocumentConverter


class NestedMarkdownConverter(DocumentConverter):
    """Convert markup by parsing it into a tree first.

    Unlike the single-slot converter, nested inline tags compose
    (``<p>Hello <strong>world</strong></p>`` becomes ``Hello **world**``)
    and links and images use their ``href``/``src`` attributes.
    """

    def __init__(self, skip_selectors: Optional[list[str]] = None) -> None:
        """Initialize the converter.

        Args:
            skip_selectors: CSS selectors for elements to drop before conversion.
        """
        self._skip_selectors = skip_selectors or ["script", "style", "noscript"]

    @property
    def name(self) -> str:
        return "nested"

    def convert(self, markup: str) -> str:
        soup = BeautifulSoup(markup, "html.parser")

        for selector in self._skip_selectors:
            for elem in soup.select(selector):
                elem.decompose()

        content = soup.body or soup
        markdown = md(str(content), heading_style="atx", bullets="-")
        return self._clean_markdown(markdown)

    def _clean_markdown(self, markdown: str) -> str:
        """Collapse blank lines and trailing whitespace."""
        lines = [line.rstrip() for line in markdown.split("\n")]
        markdown = "\n".join(lines)
        markdown = re.sub(r"\n{3,}", "\n\n", markdown).strip()
        return f"{markdown}\n" if markdown else ""
