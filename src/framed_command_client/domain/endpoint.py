"""Domain value objects describing where a command is sent.

Purpose
-------
Model a resolved network destination without reinterpreting raw socket
structures. The address is a tagged union of two small frozen dataclasses so
family dispatch happens through explicit accessors rather than binary layout.

Contents
--------
* :class:`AddressFamily` – the two supported families and their socket constants.
* :class:`IPv4Address` / :class:`IPv6Address` – binary address variants.
* :data:`Address` – union alias over both variants.
* :class:`Endpoint` – address plus host-order port.
* :class:`ConnectTarget` – the connection descriptor derived from an endpoint,
  carrying the port in network byte order.

System Role
-----------
Produced by the address resolver, consumed by the TCP connector. Contains no
I/O.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Final, Union

PORT_MAX: Final[int] = 0xFFFF


class AddressFamily(Enum):
    """Supported address families."""

    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @property
    def socket_family(self) -> socket.AddressFamily:
        """Return the :mod:`socket` constant matching this family."""

        return socket.AF_INET if self is AddressFamily.IPV4 else socket.AF_INET6

    @property
    def packed_length(self) -> int:
        """Return the size of the binary address for this family."""

        return 4 if self is AddressFamily.IPV4 else 16


@dataclass(frozen=True, slots=True)
class _BinaryAddress:
    family: ClassVar[AddressFamily]

    packed: bytes

    def __post_init__(self) -> None:
        expected = self.family.packed_length
        if len(self.packed) != expected:
            raise ValueError(f"{self.family.value} address must be {expected} bytes, got {len(self.packed)}")

    @property
    def text(self) -> str:
        """Render the binary form back to presentation text."""

        return socket.inet_ntop(self.family.socket_family, self.packed)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class IPv4Address(_BinaryAddress):
    """Four byte IPv4 address.

    Examples
    --------
    >>> IPv4Address(bytes([127, 0, 0, 1])).text
    '127.0.0.1'
    """

    family: ClassVar[AddressFamily] = AddressFamily.IPV4


@dataclass(frozen=True, slots=True)
class IPv6Address(_BinaryAddress):
    """Sixteen byte IPv6 address.

    Examples
    --------
    >>> IPv6Address(bytes(15) + b"\\x01").text
    '::1'
    """

    family: ClassVar[AddressFamily] = AddressFamily.IPV6


Address = Union[IPv4Address, IPv6Address]


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A resolved destination: binary address plus host-order port.

    Why
    ----
    Keep the family decision in one immutable value so the connector never
    has to guess which address structure it holds.

    What
    ----
    ``family`` is derived from the address variant. ``port`` stays in host
    order; the network-order form only exists on :class:`ConnectTarget`.

    Examples
    --------
    >>> endpoint = Endpoint(IPv4Address(bytes([10, 0, 0, 7])), 9000)
    >>> endpoint.family.value, str(endpoint)
    ('ipv4', '10.0.0.7:9000')
    """

    address: Address
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= PORT_MAX:
            raise ValueError(f"port must be between 0 and {PORT_MAX}, got {self.port}")

    @property
    def family(self) -> AddressFamily:
        return self.address.family

    @property
    def host(self) -> str:
        return self.address.text

    def target(self) -> ConnectTarget:
        """Build the connection descriptor for this endpoint."""

        return ConnectTarget.from_endpoint(self)

    def __str__(self) -> str:
        if self.family is AddressFamily.IPV6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class ConnectTarget:
    """Connection descriptor tagged with the family it was resolved as.

    ``sockaddr`` is the tuple :meth:`socket.socket.connect` expects for the
    family; ``packed_port`` is the port in network byte order as it appears
    in the wire-level address structure.
    """

    family: AddressFamily
    sockaddr: tuple[str, int] | tuple[str, int, int, int]
    packed_port: bytes

    @classmethod
    def from_endpoint(cls, endpoint: Endpoint) -> ConnectTarget:
        """Return the descriptor for *endpoint*.

        Examples
        --------
        >>> target = ConnectTarget.from_endpoint(Endpoint(IPv4Address(bytes([127, 0, 0, 1])), 9000))
        >>> target.sockaddr, target.packed_port.hex()
        (('127.0.0.1', 9000), '2328')
        """

        packed_port = endpoint.port.to_bytes(2, "big")
        if endpoint.family is AddressFamily.IPV6:
            return cls(endpoint.family, (endpoint.host, endpoint.port, 0, 0), packed_port)
        return cls(endpoint.family, (endpoint.host, endpoint.port), packed_port)


__all__ = [
    "Address",
    "AddressFamily",
    "ConnectTarget",
    "Endpoint",
    "IPv4Address",
    "IPv6Address",
    "PORT_MAX",
]
