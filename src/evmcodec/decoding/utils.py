"""Decoding utilities: byte <-> integer / hex / address conversions."""

from __future__ import annotations

from eth_utils import big_endian_to_int, encode_hex, to_checksum_address

from evmcodec.constants import ADDRESS_SIZE


def to_hex_string(data: bytes) -> str:
    """Return 0x-prefixed lowercase hex."""
    return encode_hex(data)


def to_int(data: bytes) -> int:
    """Unsigned big-endian integer (empty bytes are zero)."""
    return big_endian_to_int(data) if data else 0


def to_signed_int(data: bytes) -> int:
    """Two's-complement big-endian integer over the full length of `data`."""
    if not data:
        return 0
    return int.from_bytes(data, "big", signed=True)


def to_address(data: bytes) -> str:
    """Checksummed address from the last 20 bytes (left-padded if shorter)."""
    tail = data[-ADDRESS_SIZE:].rjust(ADDRESS_SIZE, b"\x00")
    return to_checksum_address(encode_hex(tail))

