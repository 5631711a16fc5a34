"""Markup to Markdown converters."""

from sitemd.convert.markup import MarkupToDocumentConverter, html_to_markdown
from sitemd.convert.nested import NestedMarkdownConverter
from sitemd.core.interfaces import DocumentConverter

CONVERTERS: dict[str, type[DocumentConverter]] = {
    "single": MarkupToDocumentConverter,
    "nested": NestedMarkdownConverter,
}


def get_converter(name: str = "single") -> DocumentConverter:
    """Create a converter by name.

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        return CONVERTERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown converter '{name}' (choose from {', '.join(CONVERTERS)})"
        ) from None


__all__ = [
    "CONVERTERS",
    "MarkupToDocumentConverter",
    "NestedMarkdownConverter",
    "get_converter",
    "html_to_markdown",
]
