"""Ethernet hardware addresses."""

from __future__ import annotations

import dataclasses
import functools
import random
import string

_HEX_DIGITS = frozenset(string.hexdigits)


def _parse(text: str) -> bytes:
    digits = "".join(ch for ch in text if ch in _HEX_DIGITS)
    # The last octet may be given as a single digit.
    if len(digits) < 2 * Mac.SIZE - 1:
        raise ValueError(f"not a MAC address: {text!r}")
    return bytes(int(digits[pos:pos + 2], 16) for pos in range(0, 2 * Mac.SIZE, 2))


@functools.total_ordering
@dataclasses.dataclass(frozen=True, eq=False, init=False, repr=False)
class Mac:
    """A six-octet Ethernet address, comparable, hashable and immutable."""

    SIZE = 6
    __slots__ = ("_octets",)
    _octets: bytes

    def __init__(self, value: Mac | str | bytes | bytearray | memoryview) -> None:
        if isinstance(value, Mac):
            octets = value._octets
        elif isinstance(value, str):
            octets = _parse(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            octets = bytes(value)
            if len(octets) != self.SIZE:
                raise ValueError(f"a MAC address has {self.SIZE} octets, got {len(octets)}")
        else:
            raise TypeError(f"cannot make a MAC address from {type(value).__name__}")
        object.__setattr__(self, "_octets", octets)

    def __str__(self) -> str:
        return ":".join(f"{octet:02X}" for octet in self._octets)

    def __repr__(self) -> str:
        return f"Mac({str(self)!r})"

    def __bytes__(self) -> bytes:
        return self._octets

    def _other_octets(self, other: object) -> bytes | None:
        if isinstance(other, Mac):
            return other._octets
        if isinstance(other, (bytes, bytearray, memoryview)) and len(other) == self.SIZE:
            return bytes(other)
        return None

    def __eq__(self, other: object) -> bool:
        octets = self._other_octets(other)
        if octets is None:
            return NotImplemented
        return self._octets == octets

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Mac):
            return NotImplemented
        return self._octets < other._octets

    def __hash__(self) -> int:
        return hash(self._octets)

    def is_null(self) -> bool:
        """True for 00:00:00:00:00:00."""
        return self._octets == bytes(self.SIZE)

    def is_broadcast(self) -> bool:
        """True for FF:FF:FF:FF:FF:FF."""
        return self._octets == b"\xff" * self.SIZE

    def is_multicast(self) -> bool:
        """True for IPv4 multicast addresses, 01:00:5E:00:00:00 to 01:00:5E:7F:FF:FF."""
        first, second, third, fourth = self._octets[:4]
        return first == 0x01 and second == 0x00 and third == 0x5E and not fourth & 0x80


NULL_MAC = Mac(bytes(Mac.SIZE))
BROADCAST_MAC = Mac(b"\xff" * Mac.SIZE)


def random_mac() -> Mac:
    """Return a random address whose top bit of the first octet is clear."""
    octets = bytearray(random.getrandbits(8) for _ in range(Mac.SIZE))
    octets[0] &= 0x7F
    return Mac(bytes(octets))