"""Composition root for ``framed_command_client``.

Purpose
-------
Provide the single entry point that sequences address resolution, connection,
framed send, one-shot receive, and close. Adapters are wired here and nowhere
else.

Contents
--------
* :class:`ClientSettings` – immutable knobs for one exchange (timeout,
  reply capacity).
* :func:`send_command` – high-level API returning the :class:`Reply`.

System Role
-----------
The orchestration is deliberately linear with no retry and no recovery: any
domain error propagates unchanged to the caller. The connection is scoped by
a ``with`` block so it is closed on every path.
"""

from __future__ import annotations

from dataclasses import dataclass

from .adapters.address.literal import LiteralAddressResolver
from .adapters.transport.tcp import TcpConnector
from .application.framing import FramedCommandChannel, encode_command
from .application.ports import AddressResolver, Connector
from .domain.endpoint import Endpoint
from .domain.errors import (
    ClientError,
    CommandTooLong,
    ConnectFailed,
    InvalidAddress,
    ReadFailed,
    SocketCreateFailed,
    TransportError,
    UsageError,
    WriteFailed,
)
from .domain.message import REPLY_CAPACITY, Command, Reply, parse_port
from .observability import log_debug, log_info, make_event, new_trace_id


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """Tunables for a single exchange.

    Attributes
    ----------
    timeout:
        Seconds for connect, send and receive; ``None`` blocks indefinitely.
    buffer_size:
        Capacity of the single receive.
    """

    timeout: float | None = None
    buffer_size: int = REPLY_CAPACITY

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")


DEFAULT_SETTINGS = ClientSettings()


def send_command(
    host: str,
    port: int | str,
    command: Command | bytes | str,
    *,
    settings: ClientSettings | None = None,
    resolver: AddressResolver | None = None,
    connector: Connector | None = None,
) -> Reply:
    """Run one resolve, connect, send, receive, close cycle and return the reply.

    Why
    ----
    Callers (the CLI, scripts, tests) need one call that honours the framing
    contract and the scoped socket lifetime without knowing about adapters.

    Parameters
    ----------
    host:
        IPv4 or IPv6 literal. Host names are rejected.
    port:
        Host-order port, or its decimal text (validated by :func:`parse_port`).
    command:
        Payload as a :class:`Command`, raw ``bytes``, or argv text.
    settings:
        Timeout and reply capacity; defaults to :data:`DEFAULT_SETTINGS`.
    resolver / connector:
        Port implementations; default to the literal resolver and TCP adapter.

    Returns
    -------
    Reply
        Bytes from the single receive, possibly empty.

    Raises
    ------
    UsageError
        Bad port text or a command longer than 255 bytes (before any I/O).
    InvalidAddress
        *host* is not a literal address (no socket is created).
    TransportError
        ``SocketCreateFailed``, ``ConnectFailed``, ``WriteFailed`` or
        ``ReadFailed`` wrapping the system error.

    Side Effects
    ------------
    Binds a fresh trace identifier and opens exactly one TCP connection.
    """

    settings = settings or DEFAULT_SETTINGS
    resolver = resolver or LiteralAddressResolver()
    connector = connector or TcpConnector(timeout=settings.timeout)

    new_trace_id()
    payload = _as_command(command)
    numeric_port = parse_port(port) if isinstance(port, str) else port
    endpoint = Endpoint(resolver.resolve(host), numeric_port)
    log_debug("exchange_started", **make_event("resolve", str(endpoint), {"family": endpoint.family.value}))

    with connector.connect(endpoint) as connection:
        channel = FramedCommandChannel(connection, capacity=settings.buffer_size)
        reply = channel.exchange(payload)

    log_info("exchange_complete", **make_event("close", str(endpoint), {"bytes": len(reply)}))
    return reply


def _as_command(command: Command | bytes | str) -> Command:
    """Normalise supported command inputs into a validated :class:`Command`."""

    if isinstance(command, Command):
        return command
    if isinstance(command, str):
        return Command.from_text(command)
    return Command(bytes(command))


__all__ = [
    "ClientError",
    "ClientSettings",
    "Command",
    "CommandTooLong",
    "ConnectFailed",
    "DEFAULT_SETTINGS",
    "InvalidAddress",
    "ReadFailed",
    "Reply",
    "SocketCreateFailed",
    "TransportError",
    "UsageError",
    "WriteFailed",
    "encode_command",
    "send_command",
]
