"""TCP stream adapter.

Purpose
-------
Open blocking TCP connections for resolved endpoints and expose them through
the :class:`~framed_command_client.application.ports.Connection` port. Every
``OSError`` is translated into the domain taxonomy at the point it occurs.

Contents
--------
* :class:`TcpConnector` – creates the socket for the endpoint's family and
  connects it, closing the socket again if the connect fails.
* :class:`TcpConnection` – context manager wrapping the connected socket.

System Role
-----------
Default connector wired by :func:`framed_command_client.core.send_command`.
"""

from __future__ import annotations

import socket
from types import TracebackType

from ...domain.endpoint import Endpoint
from ...domain.errors import ConnectFailed, ReadFailed, SocketCreateFailed, WriteFailed
from ...observability import log_debug, log_error, log_info, make_event


def _describe(exc: OSError) -> str:
    if isinstance(exc, TimeoutError) and not exc.strerror:
        return "timed out"
    return exc.strerror or str(exc) or type(exc).__name__


class TcpConnection:
    """Own one connected stream socket until :meth:`close`.

    Usage::

        with TcpConnector().connect(endpoint) as connection:
            connection.send(b"\\x04PING")
            data = connection.receive(1024)
    """

    def __init__(self, sock: socket.socket, endpoint: Endpoint) -> None:
        self._sock = sock
        self._endpoint = endpoint
        self._closed = False

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    @property
    def closed(self) -> bool:
        return self._closed

    def fileno(self) -> int:
        return self._sock.fileno()

    def send(self, data: bytes) -> None:
        """Write all of *data*, raising :class:`WriteFailed` on error."""

        if self._closed:
            raise WriteFailed("connection is closed")
        try:
            self._sock.sendall(data)
        except OSError as exc:
            log_error("write_failed", **make_event("send", str(self._endpoint), {"error": _describe(exc)}))
            raise WriteFailed(_describe(exc)) from exc

    def receive(self, capacity: int) -> bytes:
        """Perform one ``recv`` of at most *capacity* bytes."""

        if self._closed:
            raise ReadFailed("connection is closed")
        try:
            return self._sock.recv(capacity)
        except OSError as exc:
            log_error("read_failed", **make_event("receive", str(self._endpoint), {"error": _describe(exc)}))
            raise ReadFailed(_describe(exc)) from exc

    def close(self) -> None:
        """Close the socket; further calls are no-ops."""

        if self._closed:
            return
        self._closed = True
        self._sock.close()
        log_debug("connection_closed", **make_event("close", str(self._endpoint)))

    def __enter__(self) -> TcpConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class TcpConnector:
    """Create and connect stream sockets for resolved endpoints."""

    def __init__(self, *, timeout: float | None = None) -> None:
        """Initialise the connector.

        Parameters
        ----------
        timeout:
            Seconds applied to connect, send and receive. ``None`` keeps the
            socket fully blocking, so a silent peer blocks indefinitely.
        """

        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._timeout = timeout

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def connect(self, endpoint: Endpoint) -> TcpConnection:
        """Open a connection to *endpoint*.

        Steps: create a ``SOCK_STREAM`` socket for the endpoint's family, log
        the rendered address, build the connection target (port in network
        byte order), then connect.

        Raises
        ------
        SocketCreateFailed
            The operating system refused the socket.
        ConnectFailed
            The connect call failed; the socket has already been closed.
        """

        where = str(endpoint)
        try:
            sock = socket.socket(endpoint.family.socket_family, socket.SOCK_STREAM)
        except OSError as exc:
            log_error("socket_create_failed", **make_event("connect", where, {"error": _describe(exc)}))
            raise SocketCreateFailed(_describe(exc)) from exc

        target = endpoint.target()
        log_info(
            "connecting",
            **make_event(
                "connect",
                where,
                {"family": target.family.value, "fd": sock.fileno(), "port_be": target.packed_port.hex()},
            ),
        )
        try:
            sock.settimeout(self._timeout)
            sock.connect(target.sockaddr)
        except OSError as exc:
            sock.close()
            log_error("connect_failed", **make_event("connect", where, {"error": _describe(exc)}))
            raise ConnectFailed(_describe(exc)) from exc
        log_info("connected", **make_event("connect", where))
        return TcpConnection(sock, endpoint)
