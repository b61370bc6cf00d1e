"""Unit tests for the Logger facade — entry points, fatal path and guards."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from relaylog.core.logger import NOT_LOGGED_IN, Logger
from relaylog.errors import EXIT_CONFIGURATION, EXIT_PANIC
from relaylog.models.config import LogOpts
from relaylog.models.record import LogRecord
from relaylog.models.severity import Severity
from relaylog.routing.dispatcher import run_inline

LINE_RE = re.compile(r"^\[\d{2}[A-Z][a-z]{2}\d{2} \d{2}:\d{2}:\d{2}(\.\d{1,4})?\] (?P<body>.*)$")


def _bodies(text: str) -> list[str]:
    return [LINE_RE.match(line)["body"] for line in text.splitlines()]


class TestLoggerEntryPoints:
    """Each shortcut tags its record with the matching severity."""

    @pytest.mark.parametrize(
        "method, label",
        [
            ("log_debug", "Debug"),
            ("log_info", "Info"),
            ("log_warn", "Warning"),
            ("log_error", "Error"),
            ("log_critical", "Critical"),
        ],
    )
    def test_shortcut_levels(self, make_logger, capsys, method, label):
        log = make_logger(level=Severity.DEBUG, use_stdout=True)
        getattr(log, method)("queue at %d%%", 90)
        assert _bodies(capsys.readouterr().out) == [f"{label}: queue at 90%"]

    def test_log_with_explicit_level(self, make_logger, capsys):
        log = make_logger(level=Severity.INFO, use_stdout=True)
        log.log(Severity.INFO, "hello")
        assert _bodies(capsys.readouterr().out) == ["Info: hello"]

    def test_log_msg_dispatches_record(self, make_logger, capsys):
        log = make_logger(use_stdout=True)
        log.log_msg(LogRecord(level=Severity.ERROR, msg="prebuilt"))
        assert _bodies(capsys.readouterr().out) == ["Error: prebuilt"]

    def test_log_error_type_is_critical(self, make_logger, session):
        log = make_logger(kb_team="ops", kb_channel="alerts", prog_name="svc")
        log.log_error_type(ValueError("bad checksum"))
        assert session.channel.sent == ["[svc] @everyone Critical: bad checksum"]

    def test_default_threshold_drops_warning(self, make_logger, capsys):
        log = make_logger(use_stdout=True)
        log.log_warn("ignored")
        assert capsys.readouterr().out == ""

    def test_stdout_only_without_any_sink(self, make_logger, capsys):
        log = make_logger()
        log.log(Severity.STDOUT_ONLY, "banner")
        assert _bodies(capsys.readouterr().out) == ["StdoutOnly: banner"]

    def test_remote_tagging(self, make_logger, session):
        log = make_logger(level=Severity.DEBUG, kb_team="ops", prog_name="svc")
        log.log_error("e")
        log.log_warn("w")
        assert session.channel.sent == ["[svc] @everyone Error: e", "[svc] Warning: w"]

    def test_remote_failure_not_propagated(self, make_session, capsys):
        broken = make_session(fail_sends=True)
        log = Logger(LogOpts(kb_team="ops"), session_factory=lambda: broken, spawn=run_inline)
        log.log_error("disk full")
        assert "Error sending output to remote channel" in capsys.readouterr().out

    def test_config_exposed(self, make_logger):
        log = make_logger(level="info")
        assert log.config.threshold is Severity.INFO


class TestLogPanic:
    def test_exits_with_fatal_status_after_dispatch(self, make_logger, exit_recorder, log_path: Path):
        log = make_logger(out_file=log_path)
        with pytest.raises(exit_recorder.Exited):
            log.log_panic("x")
        assert exit_recorder.codes == [EXIT_PANIC]
        assert _bodies(log_path.read_text(encoding="utf-8")) == ["Critical: x"]

    def test_threaded_sinks_attempted_before_exit(self, log_path: Path, session, exit_recorder):
        log = Logger(
            LogOpts(out_file=log_path, kb_team="ops", prog_name="svc"),
            session_factory=lambda: session,
            exit_fn=exit_recorder,
        )
        with pytest.raises(exit_recorder.Exited):
            log.log_panic("out of memory")
        assert _bodies(log_path.read_text(encoding="utf-8")) == ["Critical: out of memory"]
        assert session.channel.sent == ["[svc] @everyone Critical: out of memory"]

    def test_exits_with_no_sinks_enabled(self, make_logger, exit_recorder):
        log = make_logger(level=Severity.CRITICAL)
        with pytest.raises(exit_recorder.Exited):
            log.log_panic("fatal")
        assert exit_recorder.codes == [EXIT_PANIC]

    def test_default_exit_is_os_exit(self, monkeypatch: pytest.MonkeyPatch):
        codes: list[int] = []

        def _fake_os_exit(code: int):
            codes.append(code)
            raise RuntimeError("os._exit called")

        monkeypatch.setattr("relaylog.core.termination.os._exit", _fake_os_exit)
        log = Logger(LogOpts(), spawn=run_inline)
        with pytest.raises(RuntimeError, match="os._exit called"):
            log.log_panic("fatal")
        assert codes == [EXIT_PANIC]


class TestConstructionFailure:
    def test_unauthenticated_remote_terminates(self, make_session, exit_recorder, capsys):
        with pytest.raises(exit_recorder.Exited):
            Logger(
                LogOpts(kb_team="ops"),
                session_factory=lambda: make_session(authenticated=False),
                exit_fn=exit_recorder,
            )
        assert exit_recorder.codes == [EXIT_CONFIGURATION]
        assert NOT_LOGGED_IN in capsys.readouterr().out

    def test_missing_session_factory_terminates(self, exit_recorder):
        with pytest.raises(exit_recorder.Exited):
            Logger(LogOpts(kb_team="ops"), exit_fn=exit_recorder)
        assert exit_recorder.codes == [EXIT_CONFIGURATION]


class TestPanicSafe:
    def test_context_manager_logs_and_swallows(self, make_logger, capsys):
        log = make_logger(use_stdout=True)
        with log.panic_safe():
            raise ZeroDivisionError("division by zero")
        assert _bodies(capsys.readouterr().out) == ["Critical: ZeroDivisionError: division by zero"]

    def test_decorator_form(self, make_logger, capsys):
        log = make_logger(use_stdout=True)

        @log.panic_safe()
        def _worker():
            raise KeyError()

        assert _worker() is None
        assert _bodies(capsys.readouterr().out) == ["Critical: KeyError"]

    def test_no_fault_no_output(self, make_logger, capsys):
        log = make_logger(use_stdout=True)
        with log.panic_safe():
            pass
        assert capsys.readouterr().out == ""

    def test_system_exit_passes_through(self, make_logger):
        log = make_logger(use_stdout=True)
        with pytest.raises(SystemExit):
            with log.panic_safe():
                raise SystemExit(3)
