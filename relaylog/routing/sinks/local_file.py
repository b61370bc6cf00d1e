"""Local file sink — appends one timestamped line per record.

The file is opened for every record and closed before ``accept``
returns; no handle is held between calls.  Concurrent writers rely on
``O_APPEND`` for line-level atomicity, and interleaving between lines of
concurrent writers is accepted.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from relaylog.errors import SinkWriteError
from relaylog.models.record import LogRecord
from relaylog.routing.sinks._formatting import format_line

logger = logging.getLogger(__name__)

FILE_MODE = 0o644

OPEN_FAILED = "Unable to open logging file"
WRITE_FAILED = "Error writing output to logging file"


def _append_opener(path: str, flags: int) -> int:
    return os.open(path, flags | os.O_APPEND | os.O_CREAT | os.O_WRONLY, FILE_MODE)


class LocalFileSink:
    """Appends ``"[<timestamp>] <Label>: <msg>"`` lines to a file.

    Parameters
    ----------
    path:
        The log file.  Created on first write (mode ``0o644``, subject to
        the process umask); its directory must already exist.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def sink_name(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path

    def accept(self, record: LogRecord) -> None:
        """Append *record* to the file.

        Raises
        ------
        SinkWriteError
            If the file cannot be opened or the write fails.  The handle
            is closed on every path.
        """
        line = format_line(record) + "\n"
        try:
            handle = open(self._path, "a", encoding="utf-8", opener=_append_opener)
        except OSError as exc:
            logger.debug("LocalFileSink: open %s failed: %s", self._path, exc)
            raise SinkWriteError(self.sink_name, OPEN_FAILED) from exc

        with handle:
            try:
                handle.write(line)
                handle.flush()
            except (OSError, UnicodeError) as exc:
                logger.debug("LocalFileSink: write to %s failed: %s", self._path, exc)
                raise SinkWriteError(self.sink_name, WRITE_FAILED) from exc
