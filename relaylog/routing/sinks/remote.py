"""Remote channel sink — posts records to a chat channel.

The channel handle is resolved once when the logger configuration is
built (see ``relaylog.bridge.remote``); this sink only formats and sends.
"""

from __future__ import annotations

import logging

from relaylog.bridge.remote import RemoteChannel
from relaylog.errors import SinkWriteError
from relaylog.models.record import LogRecord
from relaylog.routing.sinks._formatting import format_remote_message

logger = logging.getLogger(__name__)

SEND_FAILED = "Error sending output to remote channel"


class RemoteChannelSink:
    """Sends ``"[<prog_name>] <tag><Label>: <msg>"`` to a remote channel.

    Parameters
    ----------
    channel:
        A resolved ``RemoteChannel``.
    prog_name:
        Program name shown in brackets at the start of every message.
    """

    def __init__(self, channel: RemoteChannel, prog_name: str = "") -> None:
        self._channel = channel
        self._prog_name = prog_name

    @property
    def sink_name(self) -> str:
        return "remote"

    def accept(self, record: LogRecord) -> None:
        text = format_remote_message(record, self._prog_name)
        try:
            self._channel.send(text)
        except Exception as exc:
            logger.debug("RemoteChannelSink: send failed: %s", exc)
            raise SinkWriteError(self.sink_name, SEND_FAILED) from exc
