"""Domain value objects for the command/reply exchange.

Purpose
-------
Carry the validated command payload and the one-shot reply through the
system, together with the textual port validation shared by the CLI and the
composition root.

Contents
--------
* :data:`COMMAND_MAX_LENGTH` / :data:`REPLY_CAPACITY` – protocol limits.
* :class:`Command` – immutable payload whose length fits one unsigned byte.
* :class:`Reply` – bytes returned by a single receive call.
* :func:`parse_port` – decimal text to host-order port, raising
  :class:`UsageError` with the documented diagnostics.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .endpoint import PORT_MAX
from .errors import CommandTooLong, UsageError

COMMAND_MAX_LENGTH: Final[int] = 0xFF
REPLY_CAPACITY: Final[int] = 1024

PORT_REQUIRED_MESSAGE: Final[str] = "The port is required."
PORT_INVALID_MESSAGE: Final[str] = "Invalid characters in input."
PORT_RANGE_MESSAGE: Final[str] = "in_port_t value out of range."


@dataclass(frozen=True, slots=True)
class Command:
    """A command payload ready to be framed.

    Why
    ----
    The length prefix is one byte wide; validating here means the framing code
    never has to narrow or truncate.

    Examples
    --------
    >>> Command.from_text("PING").payload
    b'PING'
    >>> len(Command(b""))
    0
    """

    payload: bytes

    def __post_init__(self) -> None:
        if len(self.payload) > COMMAND_MAX_LENGTH:
            raise CommandTooLong(len(self.payload), COMMAND_MAX_LENGTH)

    @classmethod
    def from_text(cls, text: str) -> Command:
        """Build a command from argv text, restoring the exact argv bytes.

        :func:`os.fsencode` reverses the interpreter's argv decoding, so the
        payload matches what the shell passed in byte for byte.
        """

        return cls(os.fsencode(text))

    def __len__(self) -> int:
        return len(self.payload)


@dataclass(frozen=True, slots=True)
class Reply:
    """Bytes produced by one receive call; empty when the peer closed."""

    data: bytes
    capacity: int = REPLY_CAPACITY

    def __len__(self) -> int:
        return len(self.data)

    def __bool__(self) -> bool:
        return bool(self.data)


def parse_port(text: str) -> int:
    """Return *text* parsed as a base-10 port number.

    Why
    ----
    Ports arrive as untrusted argv strings. Only ASCII digits are accepted so
    signs, whitespace, and other numerals are rejected instead of coerced.

    Raises
    ------
    UsageError
        ``The port is required.`` for empty input,
        ``Invalid characters in input.`` for anything other than digits, and
        ``in_port_t value out of range.`` above 65535.

    Examples
    --------
    >>> parse_port("9000")
    9000
    >>> parse_port("70000")
    Traceback (most recent call last):
    ...
    framed_command_client.domain.errors.UsageError: in_port_t value out of range.
    """

    if text == "":
        raise UsageError(PORT_REQUIRED_MESSAGE)
    if not (text.isascii() and text.isdigit()):
        raise UsageError(PORT_INVALID_MESSAGE)
    # int() refuses very long digit strings, so bound the width first
    significant = text.lstrip("0") or "0"
    if len(significant) > len(str(PORT_MAX)) or int(significant, 10) > PORT_MAX:
        raise UsageError(PORT_RANGE_MESSAGE)
    return int(significant, 10)


__all__ = [
    "COMMAND_MAX_LENGTH",
    "REPLY_CAPACITY",
    "Command",
    "Reply",
    "parse_port",
]
