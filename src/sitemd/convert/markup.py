"""Single-pass markup to Markdown conversion.

The converter scans the markup once, left to right. Text is buffered
until the next ``<`` and then flushed using the formatting rule of the
currently open tag. Only one tag is tracked at a time: opening a
recognized tag replaces the previous one instead of nesting inside it,
so ``<p>Hello <strong>world</strong></p>`` renders as a paragraph
``Hello`` followed by ``**world**``.

Anchors and images reuse their text content as the target; attributes
are never read.
"""

from typing import Callable, Optional

from sitemd.core.interfaces import DocumentConverter
from sitemd.core.models import TagKind

RECOGNIZED_TAGS = {kind.value: kind for kind in TagKind}

LINE_BREAK_TAGS = {"br"}
LIST_TAGS = {"ul", "ol"}

FORMATTERS: dict[Optional[TagKind], Callable[[str], str]] = {
    TagKind.H1: lambda text: f"# {text}\n\n",
    TagKind.H2: lambda text: f"## {text}\n\n",
    TagKind.P: lambda text: f"{text}\n\n",
    TagKind.LI: lambda text: f"- {text}\n",
    TagKind.A: lambda text: f"[{text}]({text})",
    TagKind.IMG: lambda text: f"![Image]({text})\n",
    TagKind.STRONG: lambda text: f"**{text}**",
    TagKind.EM: lambda text: f"*{text}*",
    TagKind.BLOCKQUOTE: lambda text: f"> {text}\n\n",
    None: lambda text: f"{text}\n",
}


def format_block(context: Optional[TagKind], content: str) -> str:
    """Format buffered text for the given tag context.

    Returns an empty string when the trimmed text is empty.
    """
    text = content.strip()
    if not text:
        return ""
    return FORMATTERS[context](text)


class MarkupToDocumentConverter(DocumentConverter):
    """Convert markup with a single-slot tag context."""

    @property
    def name(self) -> str:
        return "single"

    def convert(self, markup: str) -> str:
        """Convert one page's markup to Markdown.

        Never raises; malformed or unclosed tags degrade to plain text.
        """
        output: list[str] = []
        buffer: list[str] = []
        context: Optional[TagKind] = None
        length = len(markup)
        i = 0

        while i < length:
            char = markup[i]
            if char != "<":
                buffer.append(char)
                i += 1
                continue

            output.append(format_block(context, "".join(buffer)))
            buffer.clear()

            # Tag name runs to the next space or '>'
            i += 1
            start = i
            while i < length and markup[i] not in (">", " "):
                i += 1
            tag = markup[start:i]

            # Skip attributes
            while i < length and markup[i] != ">":
                i += 1
            i += 1

            if tag.startswith("/"):
                context = None
                continue

            name = tag.rstrip("/").lower()
            if name in RECOGNIZED_TAGS:
                context = RECOGNIZED_TAGS[name]
            elif name in LINE_BREAK_TAGS:
                output.append("\n")
            elif name in LIST_TAGS:
                output.append("\n")
            else:
                context = None

        output.append(format_block(context, "".join(buffer)))
        return "".join(output)


def html_to_markdown(markup: str) -> str:
    """Convert markup with the default single-slot converter."""
    return MarkupToDocumentConverter().convert(markup)
