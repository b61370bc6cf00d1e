"""Process termination — the only place relaylog ends the process.

Called from exactly two sites: ``Logger.log_panic`` after its sink
attempts, and the ``Logger`` constructor when remote configuration fails.
Sink failures never lead here.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from typing import NoReturn

logger = logging.getLogger(__name__)

# Ends the process with the given status.  Must not return.
ExitFn = Callable[[int], NoReturn]


def hard_exit(code: int) -> NoReturn:
    """End the process immediately, whatever thread calls it.

    ``os._exit`` skips ``SystemExit`` handlers, ``finally`` blocks and the
    interpreter's join of non-daemon threads, none of which may keep a
    process alive after a fatal log call.
    """
    os._exit(code)


def terminate(code: int, reason: str, exit_fn: ExitFn | None = None) -> NoReturn:
    """Flush the standard streams, then end the process with *code*."""
    logger.critical("Terminating process (exit %d): %s", code, reason)
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError, AttributeError):
            pass
    (exit_fn or hard_exit)(code)
    raise AssertionError("exit function returned")  # pragma: no cover
