"""Shared test helpers: a loopback peer that speaks the framed protocol.

The peer accepts connections on an ephemeral port, reads exactly one framed
command per connection (length byte, then that many payload bytes), records
the raw frame, and answers with a scripted reply before closing. Tests use it
to observe the exact bytes the client put on the wire.
"""

from __future__ import annotations

import socket
import threading
from dataclasses import dataclass, field
from typing import Callable


def ipv6_available() -> bool:
    """Return ``True`` when a socket can be bound to ``::1``."""

    if not socket.has_ipv6:
        return False
    try:
        with socket.socket(socket.AF_INET6, socket.SOCK_STREAM) as probe:
            probe.bind(("::1", 0))
    except OSError:
        return False
    return True


def unused_port(host: str = "127.0.0.1") -> int:
    """Return a port that nothing is listening on (connects will be refused)."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind((host, 0))
        return probe.getsockname()[1]


@dataclass
class LoopbackPeer:
    """Threaded single-purpose server used as the remote end of an exchange."""

    reply: bytes | Callable[[bytes], bytes] = b""
    host: str = "127.0.0.1"
    hold: bool = False
    frames: list[bytes] = field(default_factory=list)
    port: int = 0

    def __post_init__(self) -> None:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        self._server = socket.socket(family, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind((self.host, 0))
        self._server.listen()
        self._server.settimeout(0.1)
        self.port = self._server.getsockname()[1]
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, name="loopback-peer", daemon=True)

    @property
    def connection_count(self) -> int:
        return len(self.frames)

    def __enter__(self) -> LoopbackPeer:
        self._thread.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._stop.set()
        self._thread.join(timeout=5)
        self._server.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._server.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                conn.settimeout(5)
                frame = _read_frame(conn)
                self.frames.append(frame)
                if self.hold:
                    self._stop.wait()
                    continue
                reply = self.reply(frame) if callable(self.reply) else self.reply
                if reply:
                    conn.sendall(reply)


def _read_frame(conn: socket.socket) -> bytes:
    header = _read_exactly(conn, 1)
    if not header:
        return b""
    return header + _read_exactly(conn, header[0])


def _read_exactly(conn: socket.socket, size: int) -> bytes:
    chunks: list[bytes] = []
    remaining = size
    while remaining:
        chunk = conn.recv(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
