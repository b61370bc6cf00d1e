"""relaylog: leveled, multi-sink logging with fire-and-forget fan-out.

Records are filtered by a configured threshold and handed to every
enabled sink independently:
  - Console (timestamped lines on standard output)
  - Append-only local file (reopened for every record)
  - Remote chat channel (urgent levels mention every member)
  - A console-only bypass level that ignores threshold and sink settings
  - A fatal path that waits for its sink attempts, then ends the process
"""

__version__ = "0.2.0"
__description__ = "Leveled, multi-sink logging with fire-and-forget fan-out"

from relaylog.core.logger import Logger
from relaylog.errors import (
    EXIT_CONFIGURATION,
    EXIT_PANIC,
    ConfigurationError,
    SinkWriteError,
)
from relaylog.models.config import LogOpts
from relaylog.models.record import LogRecord
from relaylog.models.severity import Severity

__all__ = [
    "Logger",
    "LogOpts",
    "LogRecord",
    "Severity",
    "ConfigurationError",
    "SinkWriteError",
    "EXIT_PANIC",
    "EXIT_CONFIGURATION",
    "__version__",
]
