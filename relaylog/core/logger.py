"""Logger — per-severity entry points over the DispatchEngine.

All entry points except ``log_panic`` return immediately: sink writes run
as fire-and-forget tasks and never fail the caller.  ``log_panic`` waits
for its sink attempts and then ends the process with ``EXIT_PANIC``.

Usage
-----
>>> log = Logger(LogOpts(level=Severity.INFO, out_file="/tmp/app.log", use_stdout=True))
>>> log.log_info("started %s workers", 4)
>>> log.log_debug("cache miss")     # dropped: Debug is above the Info threshold
>>> with log.panic_safe():
...     risky()                      # an exception here becomes a Critical record
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

from relaylog.bridge.remote import SessionFactory
from relaylog.config import LoggerSettings
from relaylog.core.termination import ExitFn, terminate
from relaylog.errors import EXIT_CONFIGURATION, EXIT_PANIC, ConfigurationError
from relaylog.models.config import LogOpts, LoggerConfig, resolve_config
from relaylog.models.record import LogRecord
from relaylog.models.severity import Severity
from relaylog.routing.dispatcher import DispatchEngine, Spawn, build_sinks
from relaylog.routing.sinks.console import write_stdout

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "Not logged into remote chat, but remote option set."


class Logger:
    """A leveled logger fanning records out to console, file and remote sinks.

    Parameters
    ----------
    opts:
        Construction options.  Defaults to ``LogOpts()``: threshold Error,
        no sinks enabled (only the bypass level prints).
    session_factory:
        Opens the remote chat session.  Required when ``opts.kb_team`` is
        set; if the session cannot be opened or is not authenticated the
        process is terminated with ``EXIT_CONFIGURATION``.
    spawn:
        Task strategy handed to the ``DispatchEngine`` (daemon threads by
        default).
    exit_fn:
        Ends the process on the fatal paths.  Defaults to ``os._exit``;
        tests inject a recorder.
    """

    def __init__(
        self,
        opts: LogOpts | None = None,
        *,
        session_factory: SessionFactory | None = None,
        spawn: Spawn | None = None,
        exit_fn: ExitFn | None = None,
    ) -> None:
        self._exit_fn = exit_fn
        try:
            self._config = resolve_config(opts or LogOpts(), session_factory)
        except ConfigurationError as exc:
            write_stdout(NOT_LOGGED_IN)
            terminate(EXIT_CONFIGURATION, str(exc), exit_fn)
        self._engine = DispatchEngine(build_sinks(self._config), spawn=spawn)

    @classmethod
    def from_env(
        cls,
        *,
        session_factory: SessionFactory | None = None,
        spawn: Spawn | None = None,
        exit_fn: ExitFn | None = None,
        **overrides: Any,
    ) -> Logger:
        """Build a logger from ``RELAYLOG_*`` settings plus *overrides*."""
        opts = LoggerSettings().to_opts(**overrides)
        return cls(opts, session_factory=session_factory, spawn=spawn, exit_fn=exit_fn)

    @property
    def config(self) -> LoggerConfig:
        """The resolved, read-only dispatch configuration."""
        return self._config

    # ------------------------------------------------------------------
    # Generic entry points
    # ------------------------------------------------------------------

    def log_msg(self, record: LogRecord) -> None:
        """Dispatch a prebuilt record."""
        self._engine.dispatch(self._config, record)

    def log(self, level: Severity | int, msg: str, *args: Any) -> None:
        """Dispatch *msg* (``%``-formatted with *args*) at *level*."""
        self.log_msg(LogRecord.from_format(level, msg, *args))

    # ------------------------------------------------------------------
    # Per-severity shortcuts
    # ------------------------------------------------------------------

    def log_debug(self, msg: str, *args: Any) -> None:
        self.log(Severity.DEBUG, msg, *args)

    def log_info(self, msg: str, *args: Any) -> None:
        self.log(Severity.INFO, msg, *args)

    def log_warn(self, msg: str, *args: Any) -> None:
        self.log(Severity.WARNING, msg, *args)

    def log_error(self, msg: str, *args: Any) -> None:
        """Log at Error; notifies remote channel members."""
        self.log(Severity.ERROR, msg, *args)

    def log_critical(self, msg: str, *args: Any) -> None:
        """Log at Critical; notifies remote channel members."""
        self.log(Severity.CRITICAL, msg, *args)

    def log_error_type(self, err: BaseException) -> None:
        """Log an exception's text at Critical without terminating."""
        self.log_msg(LogRecord.from_exception(err))

    def log_panic(self, msg: str, *args: Any) -> NoReturn:
        """Log at Critical, wait for the sink attempts, then exit.

        The process ends with ``EXIT_PANIC`` whether or not the sinks
        succeeded.
        """
        record = LogRecord.from_format(Severity.CRITICAL, msg, *args)
        self._engine.dispatch(self._config, record, wait=True)
        terminate(EXIT_PANIC, record.msg, self._exit_fn)

    # ------------------------------------------------------------------
    # Fault-to-log bridge
    # ------------------------------------------------------------------

    @contextmanager
    def panic_safe(self) -> Iterator[None]:
        """Log an escaping exception at Critical instead of propagating it.

        Works as a ``with`` block or a decorator.  Only ``Exception``
        subclasses are caught; ``SystemExit`` and ``KeyboardInterrupt``
        pass through.  A decorated function returns ``None`` when it
        faults.
        """
        try:
            yield
        except Exception as exc:
            logger.debug("panic_safe caught %s", type(exc).__name__, exc_info=True)
            text = str(exc)
            name = type(exc).__name__
            self.log_critical(f"{name}: {text}" if text else name)
