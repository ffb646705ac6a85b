"""IP addresses with wildcard pieces, as used by ban and allow lists."""

from __future__ import annotations

import enum
import ipaddress
import re
from collections.abc import Sequence

from .string_utilities import string_split

DEFAULT_MASK_VALUE = 0xFFFF

_PIECE_COUNT = 16
_IPV4_OFFSET = 12
_WORD_MASK = 0xFFFF

_STRTOL_DEC = re.compile(r"\s*([+-]?)([0-9]*)", re.ASCII)
_STRTOL_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9A-Fa-f]))?([0-9A-Fa-f]*)", re.ASCII)

SocketAddress = Sequence[object]


class IPVersion(enum.IntEnum):
    """Address family of an :class:`IPRepresentation`."""

    IPV4 = 4
    IPV6 = 16


def _parse_number(text: str, base: int) -> int:
    """Read a leading number the way ``strtol`` does, stored as an unsigned 16-bit piece."""
    pattern = _STRTOL_HEX if base == 16 else _STRTOL_DEC
    match = pattern.match(text)
    digits = match.group(2) if match else ""
    if not digits:
        return 0
    value = int(digits, base)
    if match.group(1) == "-":
        value = -value
    return value & _WORD_MASK


def _ipv4_octets(parts: Sequence[str]) -> list[int | None]:
    """Convert dotted parts to octets; ``None`` stands for a ``*`` wildcard."""
    octets: list[int | None] = []
    for part in parts:
        if part == "*":
            octets.append(None)
            continue
        value = _parse_number(part, 10)
        if value > 255:
            raise ValueError("IP is badly formatted. 255 is max value for ip part.")
        octets.append(value)
    return octets


def _apply_octets(pieces: list[int], mask: int, offset: int, octets: Sequence[int | None]) -> int:
    for position, octet in enumerate(octets, start=offset):
        if octet is None:
            mask &= ~(1 << position)
        else:
            pieces[position] = octet
    return mask


def _require_room(position: int, needed: int) -> None:
    if position + needed > _PIECE_COUNT:
        raise ValueError("IP is badly formatted. Too many parts in IPV6.")


def _parse_ipv4(ip: str) -> tuple[list[int], int]:
    parts = string_split(ip, ".")
    if len(parts) != 4:
        raise ValueError("IP is badly formatted. Max 4 parts in IPV4.")
    pieces = [0] * _PIECE_COUNT
    mask = _apply_octets(pieces, DEFAULT_MASK_VALUE, _IPV4_OFFSET, _ipv4_octets(parts))
    return pieces, mask


def _parse_ipv6(ip: str) -> tuple[list[int], int]:
    parts = string_split(ip, ":", False)
    if len(parts) > 8:
        raise ValueError("IP is badly formatted. Max 8 parts in IPV6.")

    omitted = 8 - (len(parts) - 1)
    if omitted != 0:
        empty_count = sum(1 for part in parts if not part)
        if empty_count > 1:
            if "." in parts[-1]:
                omitted -= 1
            if empty_count == 2 and parts[0] == "" and parts[1] == "":
                omitted += 1
                parts = parts[1:]
            else:
                raise ValueError(
                    "IP is badly formatted. Cannot have more than one omitted segment in IPV6."
                )

    pieces = [0] * _PIECE_COUNT
    mask = DEFAULT_MASK_VALUE
    position = 0
    last = len(parts) - 1
    for index, part in enumerate(parts):
        if part == "*":
            _require_room(position, 2)
            mask &= ~(0b11 << position)
            position += 2
            continue

        if not part:
            _require_room(position, 2 * omitted)
            position += 2 * omitted
            continue

        if len(part) < 4:
            part = part.rjust(4, "0")

        if len(part) == 4:
            _require_room(position, 2)
            pieces[position] = _parse_number(part[:2], 16)
            pieces[position + 1] = _parse_number(part[2:4], 16)
            position += 2
            continue

        if "." not in part:
            raise ValueError(
                "IP is badly formatted. IPV6 parts can have max 4 characters (or nest an IPV4)"
            )
        if position != _IPV4_OFFSET:
            raise ValueError("IP is badly formatted. Missing parts before nested IPV4.")
        if index != last:
            raise ValueError("IP is badly formatted. Nested IPV4 should be at the end")

        subparts = string_split(part, ".")
        if len(subparts) != 4:
            raise ValueError("IP is badly formatted. Nested IPV4 can have max 4 parts.")
        if any(pieces[:10]) or pieces[10] not in (0, 255) or pieces[11] not in (0, 255):
            raise ValueError(
                "IP is badly formatted. Nested IPV4 can be preceded only by 0 "
                "(and, optionally, two 255 octects)"
            )
        mask = _apply_octets(pieces, mask, position, _ipv4_octets(subparts))

    return pieces, mask


class IPRepresentation:
    """An IPv4 or IPv6 address held as 16 pieces, with ``*`` allowed for any piece.

    IPv4 addresses occupy the last four pieces.  Bits cleared in ``mask`` mark
    wildcard pieces, which are ignored when addresses are ordered.
    """

    __slots__ = ("version", "pieces", "mask")

    def __init__(self, ip: str) -> None:
        if ":" in ip:
            self.version = IPVersion.IPV6
            pieces, mask = _parse_ipv6(ip)
        else:
            self.version = IPVersion.IPV4
            pieces, mask = _parse_ipv4(ip)
        self.pieces: tuple[int, ...] = tuple(pieces)
        self.mask: int = mask

    @classmethod
    def _from_packed(cls, version: IPVersion, packed: bytes) -> IPRepresentation:
        rep = cls.__new__(cls)
        rep.version = version
        rep.pieces = tuple(bytes(_PIECE_COUNT - len(packed)) + packed)
        rep.mask = DEFAULT_MASK_VALUE
        return rep

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IPRepresentation):
            return NotImplemented
        shared = self.mask & other.mask

        def score(pieces: Sequence[int], positions: Sequence[int]) -> int:
            return sum((16 - i) * pieces[i] for i in positions if (shared >> i) & 1)

        main = [i for i in range(_PIECE_COUNT) if i not in (10, 11)]
        mine = score(self.pieces, main)
        theirs = score(other.pieces, main)

        mapping_pieces = (self.pieces[10], self.pieces[11], other.pieces[10], other.pieces[11])
        if mine == theirs and all(piece in (0x00, 0xFF) for piece in mapping_pieces):
            return False

        mine += score(self.pieces, (10, 11))
        theirs += score(other.pieces, (10, 11))
        return mine < theirs

    def __repr__(self) -> str:
        return (
            f"IPRepresentation(version={self.version.name}, "
            f"pieces={self.pieces!r}, mask={self.mask:#06x})"
        )


def _resolve(
    address: SocketAddress | None,
) -> tuple[IPVersion, ipaddress.IPv4Address | ipaddress.IPv6Address]:
    """Identify the family of a socket address tuple and parse its host."""
    if address is None:
        raise ValueError("socket pointer is null")
    if isinstance(address, (tuple, list)):
        if len(address) == 2:
            return IPVersion.IPV4, ipaddress.IPv4Address(address[0])
        if len(address) == 4:
            return IPVersion.IPV6, ipaddress.IPv6Address(address[0])
    raise ValueError("IP family must be either AF_INET or AF_INET6")


def from_socket_address(address: SocketAddress) -> IPRepresentation:
    """Build an :class:`IPRepresentation` from a ``(host, port[, flow, scope])`` tuple."""
    version, host = _resolve(address)
    return IPRepresentation._from_packed(version, host.packed)


def get_ip_str(address: SocketAddress | None) -> str:
    """Return the textual host of a socket address tuple."""
    _, host = _resolve(address)
    return str(host)


def get_port(address: SocketAddress | None) -> int:
    """Return the port of a socket address tuple."""
    _resolve(address)
    return int(address[1])  # type: ignore[index, arg-type]