"""IPv4 addresses."""

from __future__ import annotations

import dataclasses
import functools
import re

_DOTTED = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)\.([0-9]+)")


@functools.total_ordering
@dataclasses.dataclass(frozen=True, eq=False, init=False, repr=False)
class Ip:
    """An IPv4 address held as a 32-bit integer in host order."""

    SIZE = 4
    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: Ip | int | str) -> None:
        if isinstance(value, Ip):
            number = value._value
        elif isinstance(value, str):
            number = self._parse(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value <= 0xFFFFFFFF:
                raise ValueError(f"IPv4 address out of range: {value}")
            number = value
        else:
            raise TypeError(f"cannot make an IPv4 address from {type(value).__name__}")
        object.__setattr__(self, "_value", number)

    @staticmethod
    def _parse(text: str) -> int:
        match = _DOTTED.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"not an IPv4 address: {text!r}")
        number = 0
        for part in match.groups():
            octet = int(part)
            if octet > 0xFF:
                raise ValueError(f"not an IPv4 address: {text!r}")
            number = (number << 8) | octet
        return number

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return ".".join(str(b) for b in self._value.to_bytes(self.SIZE, "big"))

    def __repr__(self) -> str:
        return f"Ip({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ip):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Ip):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def _prefix(self) -> int:
        return self._value >> 24

    def is_local_host(self) -> bool:
        """True for 127.*.*.*."""
        return self._prefix() == 0x7F

    def is_broadcast(self) -> bool:
        """True for 255.255.255.255."""
        return self._value == 0xFFFFFFFF

    def is_multicast(self) -> bool:
        """True for 224.0.0.0 to 239.255.255.255."""
        return 0xE0 <= self._prefix() < 0xF0