"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the composition root, and
the CLI. The hierarchy lives in the domain layer so adapters may raise it
without importing anything from the outer layers.

Contents
--------
* :class:`ClientError` – umbrella base class for every client failure.
* :class:`UsageError` – malformed or missing command line input.
* :class:`CommandTooLong` – command payload does not fit the one-byte length.
* :class:`InvalidAddress` – text is neither an IPv4 nor an IPv6 literal.
* :class:`TransportError` – base for operating-environment failures.
* :class:`SocketCreateFailed` / :class:`ConnectFailed` /
  :class:`WriteFailed` / :class:`ReadFailed` – one per socket stage.

System Role
-----------
Leaf components raise these exceptions and never terminate the process. The
CLI adapter is the single place that maps them onto diagnostics and exit
codes.
"""

from __future__ import annotations


class ClientError(Exception):
    """Base type for all exceptions emitted by ``framed_command_client``.

    Why
    ----
    Provide a single catch-all type for callers that do not need fine-grained
    handling.
    """


class UsageError(ClientError):
    """Raised when command line input is malformed or incomplete.

    Why
    ----
    Argument problems are syntax errors: the CLI answers them with usage text,
    unlike data or transport errors.
    """


class CommandTooLong(UsageError):
    """Raised when a command payload exceeds the 255 byte framing limit.

    The length prefix is a single unsigned byte, so longer payloads are a
    caller error and are rejected before any network activity.
    """

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Command is {length} bytes long; the maximum is {limit}.")
        self.length = length
        self.limit = limit


class InvalidAddress(ClientError):
    """Raised when an address string is neither an IPv4 nor an IPv6 literal."""

    def __init__(self, address: str) -> None:
        super().__init__(f"{address} is not an IPv4 or IPv6 address")
        self.address = address


class TransportError(ClientError):
    """Base for failures reported by the operating system's socket layer.

    Why
    ----
    Resource limits, unreachable hosts, and broken pipes share one reporting
    path: the message carries the stage plus the underlying system diagnostic.

    What
    ----
    Subclasses are raised ``from`` the original :class:`OSError`; the
    :attr:`errno` property surfaces its error number when present.
    """

    stage = "transport"

    def __init__(self, reason: str) -> None:
        super().__init__(f"{self.stage}: {reason}")
        self.reason = reason

    @property
    def errno(self) -> int | None:
        cause = self.__cause__
        if isinstance(cause, OSError):
            return cause.errno
        return None


class SocketCreateFailed(TransportError):
    """The operating system refused to create a stream socket."""

    stage = "socket"


class ConnectFailed(TransportError):
    """Connecting to the endpoint failed (refused, unreachable, timed out)."""

    stage = "connect"


class WriteFailed(TransportError):
    """Writing the framed command to the connection failed."""

    stage = "write"


class ReadFailed(TransportError):
    """Receiving the reply from the connection failed."""

    stage = "read"
