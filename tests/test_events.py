"""Tests for the event sinks."""

from io import StringIO

from rich.console import Console

from sitemd.core.models import EventKind, EventLevel, PipelineEvent
from sitemd.events import ConsoleEventSink, NullEventSink

INFO = PipelineEvent(kind=EventKind.PAGE_SAVED, message="[1/2] Saved https://x.com/a")
WARNING = PipelineEvent(
    kind=EventKind.SITEMAP_FETCH_FAILED,
    level=EventLevel.WARNING,
    message="Failed to fetch sitemap https://x.com/s.xml",
)
ERROR = PipelineEvent(kind=EventKind.PAGE_FAILED, level=EventLevel.ERROR, message="boom")


def render(events, **kwargs):
    buffer = StringIO()
    sink = ConsoleEventSink(console=Console(file=buffer, width=200), **kwargs)
    for event in events:
        sink.emit(event)
    return buffer.getvalue()


class TestConsoleEventSink:
    """Tests for ConsoleEventSink."""

    def test_info_hidden_unless_verbose(self):
        assert render([INFO]) == ""
        assert "[1/2] Saved https://x.com/a" in render([INFO], verbose=True)

    def test_warnings_shown(self):
        assert "Warning: Failed to fetch sitemap" in render([WARNING])

    def test_quiet_keeps_errors_only(self):
        output = render([INFO, WARNING, ERROR], verbose=True, quiet=True)
        assert "boom" in output
        assert "Warning" not in output


class TestNullEventSink:
    def test_discards(self):
        NullEventSink().emit(ERROR)
