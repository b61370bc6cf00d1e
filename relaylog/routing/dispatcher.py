"""DispatchEngine — filters records by threshold and fans them out to sinks.

Every accepted record is handed to each enabled sink as an independent,
fire-and-forget task.  The caller never waits for a sink, and no ordering
is guaranteed between sinks of the same record or between records.  Sink
failures are reported on the console and never propagated.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping

from relaylog.errors import SinkWriteError
from relaylog.models.config import LoggerConfig, SinkKind
from relaylog.models.record import LogRecord
from relaylog.models.severity import is_bypass, is_suppressed
from relaylog.routing.sinks import BaseSink
from relaylog.routing.sinks.console import ConsoleSink
from relaylog.routing.sinks.local_file import LocalFileSink
from relaylog.routing.sinks.remote import RemoteChannelSink

logger = logging.getLogger(__name__)

# A spawn strategy starts ``task`` and returns something joinable, or
# ``None`` if the task already ran to completion.
Spawn = Callable[[Callable[[], None]], "threading.Thread | None"]


def spawn_daemon(task: Callable[[], None]) -> threading.Thread:
    """Run *task* on a daemon thread so a hung sink never blocks exit."""
    thread = threading.Thread(target=task, name="relaylog-sink", daemon=True)
    thread.start()
    return thread


def run_inline(task: Callable[[], None]) -> None:
    """Run *task* on the calling thread (deterministic, for tests)."""
    task()


def build_sinks(config: LoggerConfig) -> dict[SinkKind, BaseSink]:
    """Create the sink adapters for *config*.

    The console sink is always built: the bypass level needs it even when
    console output is switched off.
    """
    sinks: dict[SinkKind, BaseSink] = {SinkKind.CONSOLE: ConsoleSink()}
    if config.to_file and config.out_file is not None:
        sinks[SinkKind.FILE] = LocalFileSink(config.out_file)
    if config.to_remote and config.channel is not None:
        sinks[SinkKind.REMOTE] = RemoteChannelSink(config.channel, config.prog_name)
    return sinks


class DispatchEngine:
    """Applies the suppression rule and fans records out to sinks.

    The engine holds no mutable state: the sink adapters are fixed at
    construction and the configuration is passed to every call.

    Parameters
    ----------
    sinks:
        Sink adapters keyed by kind.  Must contain ``SinkKind.CONSOLE``.
    spawn:
        How a sink task is started.  Defaults to a daemon thread per task.

    Usage
    -----
    >>> engine = DispatchEngine(build_sinks(config))
    >>> engine.dispatch(config, LogRecord(level=Severity.ERROR, msg="disk full"))
    """

    def __init__(
        self,
        sinks: Mapping[SinkKind, BaseSink],
        spawn: Spawn | None = None,
    ) -> None:
        if SinkKind.CONSOLE not in sinks:
            raise ValueError("DispatchEngine requires a console sink")
        self._sinks = dict(sinks)
        self._spawn = spawn or spawn_daemon

    @property
    def sinks(self) -> dict[SinkKind, BaseSink]:
        """Return a copy of the sink adapters."""
        return dict(self._sinks)

    def targets(self, config: LoggerConfig, record: LogRecord) -> list[BaseSink]:
        """Return the sinks *record* would be written to under *config*."""
        if is_bypass(record.level):
            return [self._sinks[SinkKind.CONSOLE]]
        if is_suppressed(record.level, config.threshold):
            return []
        return [
            self._sinks[kind]
            for kind in config.enabled_sinks()
            if kind in self._sinks
        ]

    def dispatch(
        self,
        config: LoggerConfig,
        record: LogRecord,
        *,
        wait: bool = False,
    ) -> None:
        """Hand *record* to every target sink as an independent task.

        Never raises and returns nothing.  With ``wait=True`` (the fatal
        path) the call blocks until every sink attempt has finished, or
        ``config.fatal_flush_timeout`` seconds have passed.
        """
        targets = self.targets(config, record)
        if not targets:
            logger.debug("Suppressed %s record", record.level.label)
            return

        pending = [
            handle
            for handle in (
                self._spawn(self._sink_task(sink, record)) for sink in targets
            )
            if handle is not None
        ]
        if wait and pending:
            self._join(pending, config.fatal_flush_timeout)

    def _sink_task(self, sink: BaseSink, record: LogRecord) -> Callable[[], None]:
        def _task() -> None:
            try:
                sink.accept(record)
            except SinkWriteError as exc:
                self._report(str(exc))
            except Exception as exc:  # noqa: BLE001
                logger.debug("Sink %s raised unexpectedly", sink.sink_name, exc_info=True)
                self._report(f"Sink {sink.sink_name} failed: {exc}")

        return _task

    def _report(self, diagnostic: str) -> None:
        console = self._sinks[SinkKind.CONSOLE]
        report = getattr(console, "report", None)
        if report is not None:
            report(diagnostic)

    @staticmethod
    def _join(handles: list[threading.Thread], timeout: float | None) -> None:
        deadline = None if timeout is None else time.monotonic() + timeout
        for handle in handles:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            handle.join(remaining)
            if handle.is_alive():
                logger.debug("Sink task still running after fatal flush timeout")
