"""LogRecord — the immutable (level, message) pair handed to every sink."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from relaylog.models.severity import Severity

logger = logging.getLogger(__name__)


class LogRecord(BaseModel):
    """A single log message with its severity.

    Records are created fresh for every logging call and discarded once
    the sinks are done with them.  ``str(record)`` gives the
    ``"<Label>: <msg>"`` rendering shared by every sink.
    """

    model_config = ConfigDict(frozen=True)

    level: Severity
    msg: str

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, value: Any) -> Severity:
        if isinstance(value, str):
            return Severity.parse(value)
        return Severity.coerce(int(value))

    def __str__(self) -> str:
        return f"{self.level.label}: {self.msg}"

    def render_line(self, timestamp: str) -> str:
        """Render the console/file line ``"[<timestamp>] <Label>: <msg>"``."""
        return f"[{timestamp}] {self}"

    @classmethod
    def from_format(cls, level: Severity | int, fmt: str, *args: Any) -> LogRecord:
        """Build a record from a printf-style format string.

        Formatting only happens when *args* are given, so a bare ``%`` in a
        plain message is kept as-is.  A format/argument mismatch never
        raises; the raw format string is kept with the arguments appended.
        """
        if not args:
            return cls(level=level, msg=str(fmt))
        try:
            msg = str(fmt) % args
        except (TypeError, ValueError, KeyError) as exc:
            logger.debug("Bad log format %r: %s", fmt, exc)
            msg = f"{fmt} {args!r}"
        return cls(level=level, msg=msg)

    @classmethod
    def from_exception(cls, exc: BaseException) -> LogRecord:
        """Build the ``CRITICAL`` record used to report an error value."""
        text = str(exc)
        if not text:
            text = type(exc).__name__
        return cls(level=Severity.CRITICAL, msg=text)
