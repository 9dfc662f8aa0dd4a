"""Watch HTTPS traffic and reset connections whose ClientHello names a target server."""

from __future__ import annotations

import argparse
import socket
import struct
import sys
from dataclasses import dataclass, field

from sniblock.headers import EthHdr, EthType, IPPROTO_TCP, IpHdr, TcpHdr
from sniblock.ip import Ip
from sniblock.mac import Mac
from sniblock.rst import build_backward_rst, build_forward_rst
from sniblock.tls import HANDSHAKE_HEADER_SIZE, RECORD_HEADER_SIZE, extract_sni, is_client_hello

HTTPS_PORT = 443
_SIOCGIFHWADDR = 0x8927
_ETH_P_ALL = 0x0003
_SOL_PACKET = 263
_PACKET_ADD_MEMBERSHIP = 1
_PACKET_MR_PROMISC = 1
_CAPTURE_SIZE = 65535


@dataclass(frozen=True, order=True)
class FlowKey:
    """One direction of a TCP connection."""

    sip: Ip
    sport: int
    dip: Ip
    dport: int


@dataclass(frozen=True)
class BlockDecision:
    """The packets that reset a connection to a blocked server."""

    flow: FlowKey
    server_name: str
    backward_packet: bytes
    forward_frame: bytes

    @property
    def client(self) -> Ip:
        """Address the backward reset is sent to."""
        return self.flow.sip


@dataclass
class SniBlocker:
    """Reassembles client data per flow and decides when to reset a connection."""

    target: str
    my_mac: Mac
    _segments: dict[FlowKey, bytearray] = field(default_factory=dict, init=False, repr=False)

    def process(self, frame: bytes) -> BlockDecision | None:
        """Feed one captured Ethernet frame; return a decision when it completes a blocked hello."""
        frame = bytes(frame)
        try:
            eth = EthHdr.from_bytes(frame)
            if eth.type != EthType.IP4:
                return None
            ip_hdr = IpHdr.from_bytes(frame[EthHdr.SIZE:])
            if ip_hdr.proto != IPPROTO_TCP:
                return None
            ip_hl = ip_hdr.header_length()
            tcp_hdr = TcpHdr.from_bytes(frame[EthHdr.SIZE + ip_hl:])
        except ValueError:
            return None
        if tcp_hdr.dport != HTTPS_PORT:
            return None

        tcp_hl = tcp_hdr.header_length()
        data_len = ip_hdr.total_len - ip_hl - tcp_hl
        if data_len <= RECORD_HEADER_SIZE + HANDSHAKE_HEADER_SIZE:
            return None
        start = EthHdr.SIZE + ip_hl + tcp_hl
        data = frame[start:start + data_len]

        key = FlowKey(ip_hdr.sip, tcp_hdr.sport, ip_hdr.dip, tcp_hdr.dport)
        buffer = self._segments.setdefault(key, bytearray())
        buffer += data
        if not is_client_hello(buffer):
            return None

        total_len = len(buffer)
        sni = extract_sni(buffer)
        if sni is None or self.target not in sni:
            return None

        del self._segments[key]
        return BlockDecision(
            flow=key,
            server_name=sni,
            backward_packet=build_backward_rst(ip_hdr, tcp_hdr, total_len),
            forward_frame=build_forward_rst(eth, ip_hdr, tcp_hdr, total_len, self.my_mac),
        )


def get_interface_mac(interface: str) -> Mac:
    """Return the hardware address of a network interface; raises OSError on failure."""
    import fcntl

    request = struct.pack("256s", interface.encode()[:15])
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        reply = fcntl.ioctl(sock.fileno(), _SIOCGIFHWADDR, request)
    return Mac(reply[18:24])


def _open_capture(interface: str) -> socket.socket:
    sock = socket.socket(socket.AF_PACKET, socket.SOCK_RAW, socket.htons(_ETH_P_ALL))
    try:
        sock.bind((interface, 0))
        membership = struct.pack(
            "iHH8s", socket.if_nametoindex(interface), _PACKET_MR_PROMISC, 0, b""
        )
        sock.setsockopt(_SOL_PACKET, _PACKET_ADD_MEMBERSHIP, membership)
    except OSError:
        sock.close()
        raise
    return sock


def _open_raw_sender() -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_RAW)
    sock.setsockopt(socket.IPPROTO_IP, socket.IP_HDRINCL, 1)
    return sock


def _send(decision: BlockDecision, capture: socket.socket, sender: socket.socket) -> None:
    try:
        sender.sendto(decision.backward_packet, (str(decision.client), 0))
    except OSError as exc:
        print(f"Send failed-backward: {exc}", file=sys.stderr)
    else:
        print("Backward RST packet sent")
    try:
        capture.send(decision.forward_frame)
    except OSError:
        print("Send failed-forward")
    else:
        print("Forward RST packet sent")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tls-block",
        description="Reset TLS connections whose server name contains a given string.",
        epilog="sample : tls-block wlan0 example.com",
    )
    parser.add_argument("interface")
    parser.add_argument("server_name")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the blocker on an interface until interrupted."""
    args_list = sys.argv[1:] if argv is None else list(argv)
    parser = _parser()
    if len(args_list) != 2:
        parser.print_usage()
        return 1
    args = parser.parse_args(args_list)
    print(f"Target: {args.server_name}")

    try:
        my_mac = get_interface_mac(args.interface)
    except OSError:
        print("MAC error")
        return 1

    try:
        capture = _open_capture(args.interface)
    except OSError as exc:
        print(f"couldn't open device {args.interface}({exc})", file=sys.stderr)
        return 1

    blocker = SniBlocker(args.server_name, my_mac)
    try:
        with capture, _open_raw_sender() as sender:
            while True:
                try:
                    frame = capture.recv(_CAPTURE_SIZE)
                except InterruptedError:
                    continue
                decision = blocker.process(frame)
                if decision is None:
                    continue
                print(f"SNI: {decision.server_name}")
                _send(decision, capture, sender)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1