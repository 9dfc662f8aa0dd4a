"""Just enough TLS parsing to find the server name in a ClientHello."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

CONTENT_TYPE_HANDSHAKE = 0x16
HANDSHAKE_CLIENT_HELLO = 0x01
EXTENSION_SERVER_NAME = 0x0000
NAME_TYPE_HOST_NAME = 0

RECORD_HEADER_SIZE = 5
HANDSHAKE_HEADER_SIZE = 4
# Client version (2 bytes) and random (32 bytes).
_VERSION_AND_RANDOM_SIZE = 34


def is_client_hello(data: bytes) -> bool:
    """True when ``data`` starts with a handshake record carrying a ClientHello."""
    return (
        len(data) > RECORD_HEADER_SIZE
        and data[0] == CONTENT_TYPE_HANDSHAKE
        and data[RECORD_HEADER_SIZE] == HANDSHAKE_CLIENT_HELLO
    )


def _u16(data: bytes, pos: int) -> int:
    return int.from_bytes(data[pos:pos + 2], "big")


def extract_sni(data: bytes) -> str | None:
    """Return the host name of the server name extension, or None if absent or truncated."""
    data = bytes(data)
    size = len(data)
    pos = RECORD_HEADER_SIZE + HANDSHAKE_HEADER_SIZE

    if size <= pos + _VERSION_AND_RANDOM_SIZE:
        return None
    pos += _VERSION_AND_RANDOM_SIZE

    session_id_len = data[pos]
    if pos + 1 + session_id_len > size:
        return None
    pos += 1 + session_id_len

    if pos + 2 > size:
        return None
    cipher_suites_len = _u16(data, pos)
    log.debug("cipher suites length %d at %d of %d", cipher_suites_len, pos, size)
    if pos + 2 + cipher_suites_len > size:
        return None
    pos += 2 + cipher_suites_len

    if pos + 1 > size:
        return None
    compression_methods_len = data[pos]
    if pos + 1 + compression_methods_len > size:
        return None
    pos += 1 + compression_methods_len

    # Skip the total extensions length.
    if pos + 2 > size:
        return None
    pos += 2

    while pos + 4 <= size:
        ext_type = _u16(data, pos)
        ext_size = _u16(data, pos + 2)
        pos += 4
        if ext_type == EXTENSION_SERVER_NAME:
            if pos + 5 > size:
                return None
            name_type = data[pos + 2]
            name_len = _u16(data, pos + 3)
            if name_type != NAME_TYPE_HOST_NAME or pos + 5 + name_len > size:
                return None
            name = data[pos + 5:pos + 5 + name_len]
            return name.decode("ascii", errors="replace")
        pos += ext_size
    return None