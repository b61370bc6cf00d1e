"""Console sink — one timestamped line per record on standard output."""

from __future__ import annotations

from rich.console import Console

from relaylog.models.record import LogRecord
from relaylog.routing.sinks._formatting import format_line

# No markup, highlighting or wrapping: log lines are written verbatim.
# With no explicit file, rich resolves sys.stdout on every write.
_stdout = Console(markup=False, highlight=False, emoji=False, soft_wrap=True)


def write_stdout(text: str) -> None:
    """Write *text* as one line on standard output, discarding stream errors."""
    try:
        _stdout.out(text)
    except (OSError, ValueError):
        pass


class ConsoleSink:
    """Writes ``"[<timestamp>] <Label>: <msg>"`` lines to standard output.

    Also serves as the fallback destination for other sinks' diagnostics
    and is the only sink the bypass sentinel level reaches.
    """

    @property
    def sink_name(self) -> str:
        return "console"

    def accept(self, record: LogRecord) -> None:
        write_stdout(format_line(record))

    def report(self, diagnostic: str) -> None:
        """Write an undecorated diagnostic line for a failed sink."""
        write_stdout(diagnostic)
