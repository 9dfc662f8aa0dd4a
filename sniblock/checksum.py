"""Internet checksums for IPv4 and TCP headers."""

from __future__ import annotations

import struct
from dataclasses import replace

from sniblock.headers import IPPROTO_TCP, IpHdr, TcpHdr

_PSEUDO_HEADER = struct.Struct("!IIBBH")


def internet_checksum(data: bytes) -> int:
    """Return the ones' complement of the ones' complement sum of 16-bit words.

    An odd trailing byte is padded with a zero byte.
    """
    data = bytes(data)
    if len(data) % 2:
        data += b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def ip_checksum(ip_hdr: IpHdr) -> IpHdr:
    """Return a copy of ``ip_hdr`` with its header checksum filled in."""
    cleared = replace(ip_hdr, check=0)
    return replace(cleared, check=internet_checksum(bytes(cleared)))


def tcp_checksum(ip_hdr: IpHdr, tcp_hdr: TcpHdr, payload: bytes = b"") -> TcpHdr:
    """Return a copy of ``tcp_hdr`` whose checksum covers the pseudo header and ``payload``."""
    payload = bytes(payload)
    segment_len = TcpHdr.SIZE + len(payload)
    try:
        pseudo = _PSEUDO_HEADER.pack(
            int(ip_hdr.sip), int(ip_hdr.dip), 0, IPPROTO_TCP, segment_len
        )
    except struct.error as exc:
        raise ValueError(f"TCP segment too long: {segment_len} bytes") from exc
    cleared = replace(tcp_hdr, crc=0)
    return replace(cleared, crc=internet_checksum(pseudo + bytes(cleared) + payload))