"""Shared test fixtures for relaylog."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from relaylog.bridge.remote import ChannelSpec
from relaylog.core.logger import Logger
from relaylog.models.config import LogOpts
from relaylog.models.record import LogRecord
from relaylog.models.severity import Severity
from relaylog.routing.dispatcher import run_inline


# ---------------------------------------------------------------------------
# Remote chat fakes
# ---------------------------------------------------------------------------


class RecordingChannel:
    """A remote channel that keeps every message it is asked to send."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[str] = []
        self.fail = fail

    def send(self, text: str) -> None:
        if self.fail:
            raise ConnectionError("chat service unreachable")
        self.sent.append(text)


class RecordingSession:
    """A remote session handing out a single RecordingChannel."""

    def __init__(self, authenticated: bool = True, channel: RecordingChannel | None = None) -> None:
        self._authenticated = authenticated
        self.channel = channel or RecordingChannel()
        self.resolved: list[ChannelSpec] = []

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def resolve_channel(self, spec: ChannelSpec) -> RecordingChannel:
        self.resolved.append(spec)
        return self.channel


@pytest.fixture
def session() -> RecordingSession:
    """Provide an authenticated recording session."""
    return RecordingSession()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Provide a log file path inside a temp directory (not yet created)."""
    return tmp_path / "test.log"


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


class ExitRecorder:
    """Stands in for ``os._exit``: records the status and unwinds the caller."""

    class Exited(BaseException):
        pass

    def __init__(self) -> None:
        self.codes: list[int] = []

    def __call__(self, code: int):
        self.codes.append(code)
        raise self.Exited(code)


@pytest.fixture
def exit_recorder() -> ExitRecorder:
    """Provide an exit function that records instead of ending the process."""
    return ExitRecorder()


@pytest.fixture
def make_record() -> Callable[..., LogRecord]:
    """Factory fixture: build a LogRecord with sensible defaults."""

    def _factory(level: Severity | int = Severity.ERROR, msg: str = "disk full") -> LogRecord:
        return LogRecord(level=level, msg=msg)

    return _factory


@pytest.fixture
def make_logger(session: RecordingSession, exit_recorder: ExitRecorder) -> Callable[..., Logger]:
    """Factory fixture: build a Logger whose sinks run on the calling thread."""

    def _factory(**overrides: Any) -> Logger:
        return Logger(
            LogOpts(**overrides),
            session_factory=lambda: session,
            spawn=run_inline,
            exit_fn=exit_recorder,
        )

    return _factory


@pytest.fixture
def make_session() -> Callable[..., RecordingSession]:
    """Factory fixture: build a RecordingSession, optionally broken."""

    def _factory(authenticated: bool = True, fail_sends: bool = False) -> RecordingSession:
        return RecordingSession(authenticated, RecordingChannel(fail=fail_sends))

    return _factory
