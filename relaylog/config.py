"""Environment-driven logger settings.

Centralized settings using pydantic-settings.  Reads from a .env file and
``RELAYLOG_*`` environment variables, then converts into the ``LogOpts``
the ``Logger`` is built from.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from relaylog.models.config import LogOpts, parse_level_option, parse_log_path
from relaylog.models.severity import Severity


class LoggerSettings(BaseSettings):
    """Logger options with environment variable overrides.

    Examples
    --------
    Override via environment::

        export RELAYLOG_LEVEL=debug
        export RELAYLOG_OUT_FILE=/var/log/myprog.log
        export RELAYLOG_USE_STDOUT=true

    Or via .env file::

        RELAYLOG_KB_TEAM=ops
        RELAYLOG_KB_CHANNEL=alerts
        RELAYLOG_PROG_NAME=myprog
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RELAYLOG_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Severity | None = None
    out_file: Path | None = None

    # Remote chat channel
    kb_team: str = ""
    kb_channel: str = ""
    prog_name: str = ""

    use_stdout: bool = False
    fatal_flush_timeout: float | None = 5.0

    _parse_level = field_validator("level", mode="before")(parse_level_option)
    _parse_out_file = field_validator("out_file", mode="before")(parse_log_path)

    def to_opts(self, **overrides) -> LogOpts:
        """Return ``LogOpts`` from these settings, with *overrides* applied.

        Overrides whose value is ``None`` are ignored so CLI options that
        were not given do not mask the environment.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return LogOpts(**data)
