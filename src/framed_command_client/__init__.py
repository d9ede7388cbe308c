"""Public package surface for the framed TCP command client.

Exposes the composition root (:func:`send_command`), the value objects callers
pass and receive, the error taxonomy, and the logging hooks so that both
``import framed_command_client`` and ``python -m framed_command_client`` reach
the same behaviour.
"""

from __future__ import annotations

from .adapters.address.literal import LiteralAddressResolver, resolve_address, resolve_endpoint
from .adapters.transport.tcp import TcpConnection, TcpConnector
from .application.framing import FramedCommandChannel, encode_command
from .core import ClientSettings, send_command
from .domain.endpoint import AddressFamily, Endpoint, IPv4Address, IPv6Address
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
from .domain.message import COMMAND_MAX_LENGTH, REPLY_CAPACITY, Command, Reply, parse_port
from .observability import bind_trace_id, get_logger

__all__ = [
    "AddressFamily",
    "COMMAND_MAX_LENGTH",
    "ClientError",
    "ClientSettings",
    "Command",
    "CommandTooLong",
    "ConnectFailed",
    "Endpoint",
    "FramedCommandChannel",
    "IPv4Address",
    "IPv6Address",
    "InvalidAddress",
    "LiteralAddressResolver",
    "REPLY_CAPACITY",
    "ReadFailed",
    "Reply",
    "SocketCreateFailed",
    "TcpConnection",
    "TcpConnector",
    "TransportError",
    "UsageError",
    "WriteFailed",
    "bind_trace_id",
    "encode_command",
    "get_logger",
    "parse_port",
    "resolve_address",
    "resolve_endpoint",
    "send_command",
]
