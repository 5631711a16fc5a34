"""Event sinks that render pipeline events."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from sitemd.core.interfaces import EventSink
from sitemd.core.models import EventLevel, PipelineEvent


class NullEventSink(EventSink):
    """Discard all events."""

    def emit(self, event: PipelineEvent) -> None:
        pass


class ConsoleEventSink(EventSink):
    """Print events to a rich console.

    Info events are shown only when verbose. Quiet mode suppresses
    everything but errors.
    """

    STYLES = {
        EventLevel.INFO: "dim",
        EventLevel.WARNING: "yellow",
        EventLevel.ERROR: "red",
    }

    def __init__(
        self,
        console: Optional[Console] = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> None:
        self._console = console or Console(stderr=True)
        self._verbose = verbose
        self._quiet = quiet

    def emit(self, event: PipelineEvent) -> None:
        if self._quiet and event.level is not EventLevel.ERROR:
            return
        if event.level is EventLevel.INFO and not self._verbose:
            return

        style = self.STYLES[event.level]
        prefix = "Warning: " if event.level is EventLevel.WARNING else ""
        self._console.print(f"[{style}]{prefix}{escape(event.message)}[/{style}]", highlight=False)
