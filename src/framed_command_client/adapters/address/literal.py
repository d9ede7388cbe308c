"""Literal address adapter.

Purpose
-------
Detect whether a string is an IPv4 or IPv6 presentation address and convert
it to binary form. Only numeric literals are accepted; host names are never
looked up.

Key behaviours
--------------
* IPv4 is tried first, then IPv6, mirroring ``inet_pton`` semantics.
* Failure of both parses raises :class:`InvalidAddress` naming the input.
* Emits a debug event naming the detected family.
"""

from __future__ import annotations

import socket

from ...domain.endpoint import Address, AddressFamily, Endpoint, IPv4Address, IPv6Address
from ...domain.errors import InvalidAddress
from ...observability import log_debug, make_event


def _pton(family: AddressFamily, text: str) -> bytes | None:
    try:
        return socket.inet_pton(family.socket_family, text)
    except (OSError, ValueError):
        # ValueError covers embedded NUL characters
        return None


class LiteralAddressResolver:
    """Resolve IPv4/IPv6 literals without touching DNS."""

    def resolve(self, text: str) -> Address:
        """Return the typed binary address for *text*.

        Parameters
        ----------
        text:
            Presentation-format address such as ``"127.0.0.1"`` or ``"::1"``.

        Returns
        -------
        Address
            :class:`IPv4Address` when the IPv4 parse succeeds, otherwise
            :class:`IPv6Address`.

        Raises
        ------
        InvalidAddress
            When neither family accepts *text*.

        Examples
        --------
        >>> LiteralAddressResolver().resolve("192.168.0.1").packed
        b'\\xc0\\xa8\\x00\\x01'
        >>> LiteralAddressResolver().resolve("::1").family.value
        'ipv6'
        """

        packed = _pton(AddressFamily.IPV4, text)
        if packed is not None:
            address: Address = IPv4Address(packed)
        else:
            packed = _pton(AddressFamily.IPV6, text)
            if packed is None:
                log_debug("address_rejected", **make_event("resolve", None, {"address": text}))
                raise InvalidAddress(text)
            address = IPv6Address(packed)
        log_debug("address_resolved", **make_event("resolve", None, {"family": address.family.value}))
        return address


_DEFAULT_RESOLVER = LiteralAddressResolver()


def resolve_address(text: str) -> Address:
    """Resolve *text* with the default literal resolver."""

    return _DEFAULT_RESOLVER.resolve(text)


def resolve_endpoint(text: str, port: int) -> Endpoint:
    """Resolve *text* and pair it with the host-order *port*."""

    return Endpoint(resolve_address(text), port)
