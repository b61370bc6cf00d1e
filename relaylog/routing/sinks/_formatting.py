"""Shared formatting helpers for relaylog sinks."""

from __future__ import annotations

from datetime import datetime

from relaylog.models.record import LogRecord
from relaylog.models.severity import is_urgent

# English month abbreviations; strftime("%b") follows the process locale.
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

URGENT_TAG = "@everyone "


def timestamp(now: datetime | None = None) -> str:
    """Return the local-time stamp used by console and file lines.

    Pattern ``DDMonYY HH:MM:SS.ffff``: up to four fractional digits with
    trailing zeros dropped, and no dot at all when the fraction is zero.

    Examples
    --------
    >>> timestamp(datetime(2006, 1, 2, 15, 4, 5, 120000))
    '02Jan06 15:04:05.12'
    >>> timestamp(datetime(2006, 1, 2, 15, 4, 5))
    '02Jan06 15:04:05'
    """
    now = now or datetime.now()
    stamp = (
        f"{now.day:02d}{_MONTHS[now.month - 1]}{now.year % 100:02d} "
        f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}"
    )
    fraction = f"{now.microsecond // 100:04d}".rstrip("0")
    if fraction:
        stamp = f"{stamp}.{fraction}"
    return stamp


def format_line(record: LogRecord, now: datetime | None = None) -> str:
    """Render ``"[<timestamp>] <Label>: <msg>"`` for console and file sinks."""
    return record.render_line(timestamp(now))


def format_remote_message(record: LogRecord, prog_name: str) -> str:
    """Render ``"[<prog_name>] <tag><Label>: <msg>"`` for the remote channel.

    The tag mentions every channel member and is only added for urgent
    (Error and Critical) records.
    """
    tag = URGENT_TAG if is_urgent(record.level) else ""
    return f"[{prog_name}] {tag}{record}"
