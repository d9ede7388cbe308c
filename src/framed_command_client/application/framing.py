"""Length-prefixed command framing over an established connection.

Frame layout (client to server)::

    +--------+---------------------------+
    | Length |          Payload          |
    | 1 byte |  ``Length`` bytes, raw    |
    +--------+---------------------------+

- Length: unsigned byte, 0 to 255, equal to ``len(payload)``
- Payload: command bytes as given, no terminator

The reply direction is unframed: the client performs exactly one receive into
a fixed-capacity buffer and treats whatever arrived (possibly nothing) as the
reply.
"""

from __future__ import annotations

from ..domain.message import REPLY_CAPACITY, Command, Reply
from ..observability import log_debug, log_info, make_event
from .ports import Connection


def encode_length(command: Command) -> bytes:
    """Return the one-byte length prefix for *command*."""

    return bytes([len(command)])


def encode_command(command: Command) -> bytes:
    """Return the full wire form of *command*: length byte then payload.

    Examples
    --------
    >>> encode_command(Command(b"PING"))
    b'\\x04PING'
    >>> encode_command(Command(b""))
    b'\\x00'
    """

    return encode_length(command) + command.payload


class FramedCommandChannel:
    """Send framed commands and receive one-shot replies on a connection.

    Usage::

        channel = FramedCommandChannel(connection)
        channel.send(Command(b"PING"))
        reply = channel.receive()
    """

    def __init__(self, connection: Connection, *, capacity: int = REPLY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._connection = connection
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    def send(self, command: Command) -> None:
        """Write the length byte, then the payload, as two transmissions.

        A zero-length command transmits only the ``0x00`` length byte.

        Raises:
            WriteFailed: If the connection rejects either write.
        """

        where = str(self._connection.endpoint)
        self._connection.send(encode_length(command))
        if command.payload:
            self._connection.send(command.payload)
        log_debug("command_sent", **make_event("send", where, {"length": len(command)}))

    def receive(self) -> Reply:
        """Perform the single receive and wrap the result.

        Returns:
            A :class:`Reply`; empty when the peer closed without sending.

        Raises:
            ReadFailed: If the receive call fails.
        """

        data = self._connection.receive(self._capacity)
        log_info(
            "reply_received",
            **make_event("receive", str(self._connection.endpoint), {"bytes": len(data)}),
        )
        return Reply(data, self._capacity)

    def exchange(self, command: Command) -> Reply:
        """Send *command* and return the one-shot reply."""

        self.send(command)
        return self.receive()


__all__ = ["FramedCommandChannel", "encode_command", "encode_length"]
