"""Logger construction options and the resolved dispatch configuration."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from relaylog.bridge.remote import ChannelSpec, SessionFactory, open_channel
from relaylog.models.severity import DEFAULT_THRESHOLD, Severity

logger = logging.getLogger(__name__)


class SinkKind(str, Enum):
    """The independent output destinations a record can fan out to."""

    REMOTE = "remote"
    FILE = "file"
    CONSOLE = "console"


def parse_level_option(value: Any) -> Severity | None:
    """Resolve a configured level; empty means unset."""
    if value is None or value == "":
        return None
    return Severity.parse(value)


def parse_log_path(value: Any) -> Any:
    """Treat an empty path as no file.

    ``Path("")`` normalises to ``"."``, so both spellings mean unset.
    """
    if value is None or str(value).strip() in ("", "."):
        return None
    return value


class LogOpts(BaseModel):
    """Options passed to ``Logger``.

    Only ``use_stdout`` switches a sink on explicitly; the file sink is on
    when ``out_file`` is set and the remote sink is on when ``kb_team`` is
    set.  ``level`` left unset (or set to the zero sentinel) means
    ``Severity.ERROR``.
    """

    model_config = ConfigDict(frozen=True)

    level: Severity | None = None
    out_file: Path | None = None
    kb_team: str = ""
    kb_channel: str = ""
    prog_name: str = ""
    use_stdout: bool = False
    fatal_flush_timeout: float | None = 5.0

    _parse_level = field_validator("level", mode="before")(parse_level_option)
    _parse_out_file = field_validator("out_file", mode="before")(parse_log_path)


class LoggerConfig(BaseModel):
    """Resolved, immutable configuration shared by every logging call.

    Built once by ``resolve_config`` and only read afterwards, so it can
    be used from any number of threads without locking.  ``channel`` is
    the remote handle owned by this configuration (``None`` unless
    ``to_remote``).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    threshold: Severity = DEFAULT_THRESHOLD
    to_stdout: bool = False
    to_file: bool = False
    to_remote: bool = False
    out_file: Path | None = None
    prog_name: str = ""
    channel_spec: ChannelSpec | None = None
    channel: Any = Field(default=None, exclude=True, repr=False)
    fatal_flush_timeout: float | None = 5.0

    def is_enabled(self, kind: SinkKind) -> bool:
        return {
            SinkKind.REMOTE: self.to_remote,
            SinkKind.FILE: self.to_file,
            SinkKind.CONSOLE: self.to_stdout,
        }[kind]

    def enabled_sinks(self) -> list[SinkKind]:
        """Enabled sinks in dispatch order (remote, file, console)."""
        return [kind for kind in SinkKind if self.is_enabled(kind)]


def resolve_config(
    opts: LogOpts,
    session_factory: SessionFactory | None = None,
) -> LoggerConfig:
    """Derive the dispatch configuration from construction options.

    Raises
    ------
    ConfigurationError
        If a remote team is configured but the remote session cannot be
        opened, is unauthenticated, or cannot resolve the channel.
    """
    threshold = opts.level
    if threshold is None or threshold == Severity.STDOUT_ONLY:
        threshold = DEFAULT_THRESHOLD

    channel_spec: ChannelSpec | None = None
    channel = None
    if opts.kb_team:
        channel_spec = ChannelSpec.for_team(opts.kb_team, opts.kb_channel)
        channel = open_channel(session_factory, channel_spec)

    config = LoggerConfig(
        threshold=threshold,
        to_stdout=opts.use_stdout,
        to_file=opts.out_file is not None,
        to_remote=channel is not None,
        out_file=opts.out_file,
        prog_name=opts.prog_name,
        channel_spec=channel_spec,
        channel=channel,
        fatal_flush_timeout=opts.fatal_flush_timeout,
    )
    logger.debug(
        "Logger configured: threshold=%s sinks=%s",
        threshold.label,
        [kind.value for kind in config.enabled_sinks()],
    )
    return config
