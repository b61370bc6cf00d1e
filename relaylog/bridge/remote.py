"""Remote chat bridge — the boundary to an external chat transport.

Bridge boundary
---------------
relaylog never talks to a chat service directly.  A caller-provided
*session factory* (the ``openSession()`` of the transport) returns a
``RemoteSession``; the session resolves a ``ChannelSpec`` into a
``RemoteChannel`` whose ``send`` delivers one text message.

Session establishment happens exactly once, while the logger
configuration is resolved.  Every failure at that point becomes a
``ConfigurationError`` so that a logger which was asked for a remote sink
never starts silently without one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from relaylog.errors import ConfigurationError

logger = logging.getLogger(__name__)


class MembersType(str, Enum):
    """How a chat channel is addressed."""

    TEAM = "team"
    USER = "user"


class ChannelSpec(BaseModel):
    """Where remote messages go.

    With a ``topic_name`` the message goes to that channel of the team
    called ``name``; without one, ``name`` is a user (or comma-separated
    users) addressed in direct-message style.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    topic_name: str = ""
    members_type: MembersType = MembersType.USER

    @classmethod
    def for_team(cls, team: str, channel: str = "") -> ChannelSpec:
        if channel:
            return cls(name=team, topic_name=channel, members_type=MembersType.TEAM)
        return cls(name=team, members_type=MembersType.USER)

    def describe(self) -> str:
        if self.members_type is MembersType.TEAM:
            return f"{self.name}#{self.topic_name}"
        return f"@{self.name}"


@runtime_checkable
class RemoteChannel(Protocol):
    """A resolved destination that accepts text messages."""

    def send(self, text: str) -> None:
        """Deliver *text*.  Raise on failure; the caller decides what to do."""
        ...


@runtime_checkable
class RemoteSession(Protocol):
    """An open client session with the chat service."""

    @property
    def is_authenticated(self) -> bool:
        """Whether the session is logged in and may send messages."""
        ...

    def resolve_channel(self, spec: ChannelSpec) -> RemoteChannel:
        """Return a channel handle for *spec*."""
        ...


SessionFactory = Callable[[], RemoteSession]


def open_channel(
    session_factory: SessionFactory | None,
    spec: ChannelSpec,
) -> RemoteChannel:
    """Open a session and resolve *spec* into a sendable channel.

    Raises
    ------
    ConfigurationError
        If no factory was supplied, the factory fails, the session is not
        authenticated, or the channel cannot be resolved.
    """
    if session_factory is None:
        raise ConfigurationError(
            f"Remote channel {spec.describe()} requested but no session factory given"
        )
    try:
        session = session_factory()
    except Exception as exc:
        raise ConfigurationError(f"Unable to open remote session: {exc}") from exc

    if not session.is_authenticated:
        raise ConfigurationError(
            f"Remote session is not authenticated (channel {spec.describe()})"
        )

    try:
        channel = session.resolve_channel(spec)
    except Exception as exc:
        raise ConfigurationError(
            f"Unable to resolve remote channel {spec.describe()}: {exc}"
        ) from exc

    logger.info("Remote channel resolved: %s", spec.describe())
    return channel
