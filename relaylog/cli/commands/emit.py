"""``relaylog emit`` — log a single record from the shell.

Settings come from ``RELAYLOG_*`` environment variables (or .env) and are
overridden by the command options.  Sinks run on the calling thread so the
record is written before the command exits.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer

from relaylog.config import LoggerSettings
from relaylog.core.logger import Logger
from relaylog.models.record import LogRecord
from relaylog.models.severity import Severity
from relaylog.routing.dispatcher import run_inline


def _parse_severity(value: Optional[str]) -> Optional[Severity]:
    if value is None:
        return None
    try:
        return Severity.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _exit_command(code: int) -> NoReturn:
    # Sinks already ran inline; typer turns this into the process status.
    raise typer.Exit(code=code)


def emit_cmd(
    level: str = typer.Argument(..., help="Severity: critical, error, warning, info, debug or stdoutonly."),
    message: str = typer.Argument(..., help="The message text."),
    out_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Append to this log file."),
    stdout: Optional[bool] = typer.Option(None, "--stdout/--no-stdout", help="Write to standard output."),
    threshold: Optional[str] = typer.Option(None, "--threshold", "-t", help="Most verbose level let through."),
    prog_name: Optional[str] = typer.Option(None, "--prog-name", help="Program name for remote messages."),
    panic: bool = typer.Option(False, "--panic", help="Log at Critical, overriding LEVEL, and exit with the fatal status."),
) -> None:
    """Emit one log record through the configured sinks.

    With ``--panic`` the record is always Critical and LEVEL is only
    checked for validity.
    """
    severity = _parse_severity(level)
    opts = LoggerSettings().to_opts(
        level=_parse_severity(threshold),
        out_file=out_file,
        use_stdout=stdout,
        prog_name=prog_name,
    )
    log = Logger(opts, spawn=run_inline, exit_fn=_exit_command)
    if panic:
        log.log_panic(message)
    log.log_msg(LogRecord(level=severity, msg=message))
