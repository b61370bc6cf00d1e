"""Sink protocol for relaylog record routing.

All sinks implement the ``BaseSink`` protocol: a ``sink_name`` property
and an ``accept(record)`` method.  The dispatcher calls ``accept`` on
every enabled sink for every record that passes the threshold.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from relaylog.models.record import LogRecord


@runtime_checkable
class BaseSink(Protocol):
    """Protocol that every relaylog sink must implement.

    Attributes
    ----------
    sink_name : str
        A unique human-readable identifier for this sink instance
        (e.g. ``"console"``, ``"file"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def accept(self, record: LogRecord) -> None:
        """Write *record* to this sink.

        Implementations raise ``SinkWriteError`` when their local write
        fails.  The dispatcher reports the failure on the console and
        carries on; nothing reaches the logging caller.
        """
        ...
