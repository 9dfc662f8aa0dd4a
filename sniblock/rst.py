"""Building TCP reset packets that tear down both directions of a connection."""

from __future__ import annotations

import random
from dataclasses import replace

from sniblock.checksum import ip_checksum, tcp_checksum
from sniblock.headers import IPPROTO_TCP, EthHdr, EthType, IpHdr, TcpHdr
from sniblock.mac import Mac

TCP_FLAG_RST = 0x04
TCP_FLAG_ACK = 0x10
_RST_ACK = TCP_FLAG_RST | TCP_FLAG_ACK
_VERSION_IHL = 0x45
_DATA_OFFSET = 0x50
_TOTAL_LEN = IpHdr.SIZE + TcpHdr.SIZE


def _ident(ident: int | None) -> int:
    return random.getrandbits(16) if ident is None else ident


def _reset_segment(
    ip_hdr: IpHdr, sport: int, dport: int, seqnum: int, acknum: int
) -> TcpHdr:
    tcp_hdr = TcpHdr(
        sport=sport,
        dport=dport,
        seqnum=seqnum & 0xFFFFFFFF,
        acknum=acknum & 0xFFFFFFFF,
        data_offset_reserved=_DATA_OFFSET,
        flags=_RST_ACK,
        win=0,
        crc=0,
        urgptr=0,
    )
    return tcp_checksum(ip_hdr, tcp_hdr)


def build_forward_rst(
    eth: EthHdr,
    ip_hdr: IpHdr,
    tcp_hdr: TcpHdr,
    data_len: int,
    my_mac: Mac,
    ident: int | None = None,
) -> bytes:
    """Return an Ethernet frame resetting the connection towards the server.

    The sequence number follows the ``data_len`` bytes the client has sent.
    """
    new_eth = EthHdr(dmac=eth.dmac, smac=my_mac, type=EthType.IP4)
    new_ip = ip_checksum(
        IpHdr(
            version_ihl=_VERSION_IHL,
            tos=0,
            total_len=_TOTAL_LEN,
            id=_ident(ident),
            frag=0,
            ttl=ip_hdr.ttl,
            proto=IPPROTO_TCP,
            check=0,
            sip=ip_hdr.sip,
            dip=ip_hdr.dip,
        )
    )
    new_tcp = _reset_segment(
        new_ip,
        sport=tcp_hdr.sport,
        dport=tcp_hdr.dport,
        seqnum=tcp_hdr.seqnum + data_len,
        acknum=tcp_hdr.acknum,
    )
    return bytes(new_eth) + bytes(new_ip) + bytes(new_tcp)


def build_backward_rst(
    ip_hdr: IpHdr, tcp_hdr: TcpHdr, data_len: int, ident: int | None = None
) -> bytes:
    """Return an IPv4 packet resetting the connection towards the client."""
    new_ip = ip_checksum(
        replace(
            ip_hdr,
            version_ihl=_VERSION_IHL,
            tos=0,
            total_len=_TOTAL_LEN,
            id=_ident(ident),
            sip=ip_hdr.dip,
            dip=ip_hdr.sip,
        )
    )
    new_tcp = _reset_segment(
        new_ip,
        sport=tcp_hdr.dport,
        dport=tcp_hdr.sport,
        seqnum=tcp_hdr.acknum,
        acknum=tcp_hdr.seqnum + data_len,
    )
    return bytes(new_ip) + bytes(new_tcp)