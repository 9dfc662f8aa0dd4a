# sniblock

`sniblock` watches IPv4 traffic on a network interface and cuts off TLS
connections whose Client Hello names a chosen server. It reads the Server
Name Indication (SNI) extension from the handshake. When the name contains
the target string, it sends a TCP reset (RST+ACK) in each direction. One goes
to the client as a raw IPv4 packet. The other goes to the server as an
Ethernet frame sent from the interface's own hardware address.

Only TCP segments to port 443 are inspected. A segment is used only if its
payload is longer than a TLS record header plus a handshake header
(9 bytes). Payloads are buffered per flow (source address and port,
destination address and port), so a Client Hello split over several
segments is read once it is complete. The buffer of a flow is dropped once
that flow has been reset.

## Requirements

- Linux (the command uses `AF_PACKET` capture sockets and the
  `SIOCGIFHWADDR` ioctl)
- Python 3.10 or later
- Privileges to capture packets and send raw IP packets (run as root or
  with `CAP_NET_RAW`)

## Installation

```
pip install .
```

## Command line

```
sniblock <interface> <server name>
```

For example, to reset every TLS connection whose server name contains
`example.com` on interface `wlan0`:

```
sudo sniblock wlan0 example.com
```

The command behaves as follows:

- It prints the target, then puts the interface into promiscuous mode and
  reads frames until it is interrupted.
- For each connection it blocks, it prints `SNI: <name>`, then reports
  whether the backward and the forward reset were sent.
- If it is not given exactly two arguments, it prints a usage line and
  exits with status 1.
- It also exits with status 1 if it cannot read the interface's hardware
  address or cannot open the interface.
- It exits with status 0 when interrupted with Ctrl-C.

## Using it as a library

The pieces behind the command can be used on their own. None of them, apart
from `get_interface_mac`, touches the network.

Reading the server name from a TLS record:

```python
from sniblock.tls import is_client_hello, extract_sni

if is_client_hello(record_bytes):
    name = extract_sni(record_bytes)  # str, or None if absent or truncated
```

Deciding what to do with captured Ethernet frames:

```python
from sniblock.blocker import SniBlocker
from sniblock.mac import Mac

blocker = SniBlocker("example.com", Mac("02:00:00:00:00:01"))
decision = blocker.process(frame_bytes)
```

`process` returns `None` for most frames. It returns a `BlockDecision` when
a frame completes a Client Hello whose server name contains the target. The
decision has these fields:

- `flow`: a `FlowKey` of `sip`, `sport`, `dip` and `dport`.
- `server_name`: the server name found in the Client Hello.
- `backward_packet`: an IPv4 packet that resets the connection toward the
  client.
- `forward_frame`: an Ethernet frame that resets the connection toward the
  server.
- `client`: the address the backward packet is meant for.

`get_interface_mac(interface)` returns an interface's hardware address as a
`Mac`. It raises `OSError` on failure.

The other modules are:

- `sniblock.rst`: `build_forward_rst(eth, ip_hdr, tcp_hdr, data_len, my_mac,
  ident=None)` and `build_backward_rst(ip_hdr, tcp_hdr, data_len,
  ident=None)` build the reset packets as bytes. A random IP identification
  is used when `ident` is not given.
- `sniblock.checksum`: `internet_checksum(data)`, `ip_checksum(ip_hdr)` and
  `tcp_checksum(ip_hdr, tcp_hdr, payload=b"")`. The last two return copies of
  the header with the checksum filled in.
- `sniblock.headers`: the frozen dataclasses `EthHdr`, `IpHdr` and `TcpHdr`.
  Each has a `from_bytes` class method and `bytes()` support, and `IpHdr` and
  `TcpHdr` also have a `header_length()` method. The module also holds the
  `EthType` enum.
- `sniblock.mac.Mac` and `sniblock.ip.Ip`: immutable, hashable and ordered
  address types. They are built from text, from bytes or from an integer
  (for `Ip`), and have `is_broadcast`, `is_multicast` and similar checks.
  `sniblock.mac.random_mac()` returns a random address.

## Limitations

- Only IPv4 over Ethernet is handled; IPv6 traffic is ignored.
- Buffered data for a flow that never turns into a matching Client Hello is
  kept for as long as the program runs.
- Matching is a plain substring test on the server name, and it is
  case-sensitive.

## Running the tests

```
pip install .[test]
pytest
```