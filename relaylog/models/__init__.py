"""relaylog data models — all Pydantic v2, all frozen (immutable)."""

from relaylog.models.config import LogOpts, LoggerConfig, SinkKind, resolve_config
from relaylog.models.record import LogRecord
from relaylog.models.severity import (
    DEFAULT_THRESHOLD,
    Severity,
    is_bypass,
    is_suppressed,
    is_urgent,
)

__all__ = [
    # severity
    "Severity",
    "DEFAULT_THRESHOLD",
    "is_bypass",
    "is_suppressed",
    "is_urgent",
    # record
    "LogRecord",
    # config
    "LogOpts",
    "LoggerConfig",
    "SinkKind",
    "resolve_config",
]
