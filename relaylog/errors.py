"""Error taxonomy and process exit codes for relaylog.

Logging calls never return errors to the caller.  The only errors that
leave this package are raised at construction time (``ConfigurationError``)
and they end the process when they reach the ``Logger`` constructor.
"""

from __future__ import annotations

# The fatal path's status; the shell sees os.Exit(-1) style exits as 255.
EXIT_PANIC: int = 255

# sysexits.h EX_CONFIG: remote sink requested but the session is unusable.
EXIT_CONFIGURATION: int = 78


class RelayLogError(RuntimeError):
    """Base class for every relaylog error."""


class ConfigurationError(RelayLogError):
    """Raised when a requested sink cannot be configured at construction.

    The only producer today is the remote sink: the session could not be
    opened or is not authenticated.  It must not be caught and ignored;
    ``Logger`` turns it into process termination.
    """


class SinkWriteError(RelayLogError):
    """Raised by a sink when its local write attempt fails.

    The dispatcher reports it to the console fallback.  It is never
    propagated to the logging caller and never retried.
    """

    def __init__(self, sink_name: str, message: str) -> None:
        super().__init__(message)
        self.sink_name = sink_name
