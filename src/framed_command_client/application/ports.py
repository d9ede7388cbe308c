"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts adapters must satisfy so the composition root
and the framing channel can work without depending on concrete sockets.

Contents
--------
* :class:`AddressResolver` – turns literal text into a binary address.
* :class:`Connection` – one open byte stream bound to an endpoint.
* :class:`Connector` – opens a :class:`Connection` for an endpoint.

System Role
-----------
These protocols keep the dependency arrows pointing inwards. Tests substitute
in-memory connections; the default wiring uses the TCP adapter.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.endpoint import Address, Endpoint


@runtime_checkable
class AddressResolver(Protocol):
    """Parse a textual address into its typed binary form.

    Why
    ----
    Family detection is the first decision of every exchange; isolating it
    lets callers swap in stricter or broader parsing rules.
    """

    def resolve(self, text: str) -> Address:
        """Return the address for *text* or raise ``InvalidAddress``."""


@runtime_checkable
class Connection(Protocol):
    """An established bidirectional byte stream.

    Methods raise ``WriteFailed`` / ``ReadFailed`` rather than ``OSError``.
    """

    @property
    def endpoint(self) -> Endpoint:
        """Endpoint the stream is bound to for its whole lifetime."""

    def send(self, data: bytes) -> None:
        """Write all of *data* as one transmission."""

    def receive(self, capacity: int) -> bytes:
        """Perform exactly one receive of at most *capacity* bytes."""

    def close(self) -> None:
        """Release the underlying resource; safe to call twice."""

    def __enter__(self) -> Connection:
        """Enter the scope that owns the connection."""

    def __exit__(self, *exc_info: object) -> None:
        """Close the connection on every exit path."""


@runtime_checkable
class Connector(Protocol):
    """Open connections to resolved endpoints."""

    def connect(self, endpoint: Endpoint) -> Connection:
        """Return an open connection or raise ``SocketCreateFailed`` / ``ConnectFailed``."""
