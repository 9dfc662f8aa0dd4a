import dataclasses

import pytest

from sniblock.headers import EthHdr, EthType, IpHdr, TcpHdr
from sniblock.ip import Ip
from sniblock.mac import Mac

DMAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x01])
SMAC = bytes([0x02, 0x00, 0x00, 0x00, 0x00, 0x02])


def make_ip(**changes):
    header = IpHdr(
        version_ihl=0x45,
        tos=0,
        total_len=IpHdr.SIZE + TcpHdr.SIZE,
        id=1234,
        frag=0x4000,
        ttl=64,
        proto=6,
        check=0,
        sip=Ip("192.168.0.1"),
        dip=Ip("10.0.0.2"),
    )
    return dataclasses.replace(header, **changes)


def make_tcp(**changes):
    header = TcpHdr(
        sport=50000,
        dport=443,
        seqnum=100000,
        acknum=200000,
        data_offset_reserved=0x50,
        flags=0x18,
        win=65535,
        crc=0,
        urgptr=0,
    )
    return dataclasses.replace(header, **changes)


def test_eth_parse_fields():
    raw = DMAC + SMAC + b"\x08\x00"
    eth = EthHdr.from_bytes(raw + b"payload")
    assert eth.dmac == Mac(DMAC)
    assert eth.smac == Mac(SMAC)
    assert eth.type == EthType.IP4


def test_eth_round_trip():
    raw = DMAC + SMAC + b"\x86\xdd"
    eth = EthHdr.from_bytes(raw)
    assert bytes(eth) == raw
    assert eth.type == EthType.IP6
    assert len(bytes(eth)) == EthHdr.SIZE


def test_eth_too_short():
    with pytest.raises(ValueError):
        EthHdr.from_bytes(DMAC + SMAC)


def test_eth_bad_type_rejected_on_encode():
    with pytest.raises(ValueError):
        bytes(EthHdr(Mac(DMAC), Mac(SMAC), 0x10000))


def test_ip_round_trip():
    header = make_ip()
    raw = bytes(header)
    assert len(raw) == IpHdr.SIZE
    assert IpHdr.from_bytes(raw) == header


def test_ip_addresses_on_the_wire():
    raw = bytes(make_ip())
    assert raw[12:16] == bytes([192, 168, 0, 1])
    assert raw[16:20] == bytes([10, 0, 0, 2])
    assert raw[0] == 0x45


def test_ip_parse_ignores_trailing_bytes():
    header = make_ip(ttl=7)
    parsed = IpHdr.from_bytes(bytes(header) + b"\x00" * 30)
    assert parsed == header
    assert parsed.sip == Ip("192.168.0.1")


def test_ip_header_length():
    assert make_ip().header_length() == IpHdr.SIZE
    assert make_ip(version_ihl=0x46).header_length() == IpHdr.SIZE + 4


def test_ip_too_short():
    with pytest.raises(ValueError):
        IpHdr.from_bytes(bytes(IpHdr.SIZE - 1))


def test_ip_out_of_range_rejected():
    with pytest.raises(ValueError):
        bytes(make_ip(ttl=256))


def test_tcp_round_trip():
    header = make_tcp()
    raw = bytes(header)
    assert len(raw) == TcpHdr.SIZE
    assert TcpHdr.from_bytes(raw) == header


def test_tcp_ports_big_endian():
    raw = bytes(make_tcp())
    assert raw[2:4] == (443).to_bytes(2, "big")
    assert raw[0:2] == (50000).to_bytes(2, "big")
    assert raw[4:8] == (100000).to_bytes(4, "big")


def test_tcp_header_length():
    assert make_tcp().header_length() == TcpHdr.SIZE
    assert make_tcp(data_offset_reserved=0x80).header_length() == TcpHdr.SIZE + 12


def test_tcp_too_short():
    with pytest.raises(ValueError):
        TcpHdr.from_bytes(b"\x00" * 10)


def test_tcp_out_of_range_rejected():
    with pytest.raises(ValueError):
        bytes(make_tcp(seqnum=2**32))


def test_headers_are_immutable():
    header = make_tcp()
    with pytest.raises(dataclasses.FrozenInstanceError):
        header.sport = 1
    assert header.sport == 50000