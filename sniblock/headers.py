"""Ethernet, IPv4 and TCP headers as they appear on the wire."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import ClassVar

from sniblock.ip import Ip
from sniblock.mac import Mac

IPPROTO_TCP = 6


class EthType(enum.IntEnum):
    """Ethernet payload types."""

    IP4 = 0x0800
    ARP = 0x0806
    IP6 = 0x86DD


def _unpack(layout: struct.Struct, data: bytes, name: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"{name} needs {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(data, 0)


def _pack(layout: struct.Struct, name: str, *values: object) -> bytes:
    try:
        return layout.pack(*values)
    except struct.error as exc:
        raise ValueError(f"cannot encode {name}: {exc}") from exc


@dataclass(frozen=True)
class EthHdr:
    """An Ethernet II header; ``type`` is in host order."""

    dmac: Mac
    smac: Mac
    type: int

    SIZE: ClassVar[int] = 14
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("!6s6sH")

    @classmethod
    def from_bytes(cls, data: bytes) -> EthHdr:
        """Decode the header at the start of ``data``; trailing bytes are ignored."""
        dmac, smac, eth_type = _unpack(cls._LAYOUT, data, "Ethernet header")
        return cls(Mac(dmac), Mac(smac), eth_type)

    def __bytes__(self) -> bytes:
        return _pack(self._LAYOUT, "Ethernet header", bytes(self.dmac), bytes(self.smac), self.type)


@dataclass(frozen=True)
class IpHdr:
    """An IPv4 header without options; multi-byte fields are in host order.

    ``frag`` holds the flags and fragment offset as one 16-bit field.
    """

    version_ihl: int
    tos: int
    total_len: int
    id: int
    frag: int
    ttl: int
    proto: int
    check: int
    sip: Ip
    dip: Ip

    SIZE: ClassVar[int] = 20
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("!BBHHHBBHII")

    @classmethod
    def from_bytes(cls, data: bytes) -> IpHdr:
        """Decode the fixed header at the start of ``data``; trailing bytes are ignored."""
        *fields, sip, dip = _unpack(cls._LAYOUT, data, "IPv4 header")
        return cls(*fields, Ip(sip), Ip(dip))

    def __bytes__(self) -> bytes:
        return _pack(
            self._LAYOUT,
            "IPv4 header",
            self.version_ihl,
            self.tos,
            self.total_len,
            self.id,
            self.frag,
            self.ttl,
            self.proto,
            self.check,
            int(self.sip),
            int(self.dip),
        )

    def header_length(self) -> int:
        """Header length in bytes, from the IHL field."""
        return (self.version_ihl & 0x0F) * 4


@dataclass(frozen=True)
class TcpHdr:
    """A TCP header without options; multi-byte fields are in host order."""

    sport: int
    dport: int
    seqnum: int
    acknum: int
    data_offset_reserved: int
    flags: int
    win: int
    crc: int
    urgptr: int

    SIZE: ClassVar[int] = 20
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("!HHIIBBHHH")

    @classmethod
    def from_bytes(cls, data: bytes) -> TcpHdr:
        """Decode the fixed header at the start of ``data``; trailing bytes are ignored."""
        return cls(*_unpack(cls._LAYOUT, data, "TCP header"))

    def __bytes__(self) -> bytes:
        return _pack(
            self._LAYOUT,
            "TCP header",
            self.sport,
            self.dport,
            self.seqnum,
            self.acknum,
            self.data_offset_reserved,
            self.flags,
            self.win,
            self.crc,
            self.urgptr,
        )

    def header_length(self) -> int:
        """Header length in bytes, from the data offset field."""
        return ((self.data_offset_reserved >> 4) & 0x0F) * 4