"""Padding validators.

All predicates take the full encoded bytes and the number of meaningful
bytes; everything outside them is padding.
"""

from __future__ import annotations


def check_padding_left(data: bytes, length: int) -> bool:
    """Bytes before the last `length` bytes must all be zero."""
    padding = data[:max(len(data) - length, 0)]
    return not any(padding)


def check_padding_right(data: bytes, length: int) -> bool:
    """Bytes after the first `length` bytes must all be zero."""
    return not any(data[length:])


def check_padding_signed(data: bytes, length: int) -> bool:
    """Bytes before the last `length` bytes must all equal the sign byte.

    The sign byte is 0xff when the top bit of the first meaningful byte is set,
    0x00 otherwise.
    """
    cut = max(len(data) - length, 0)
    padding, value = data[:cut], data[cut:]
    sign_byte = 0xFF if value and value[0] & 0x80 else 0x00
    return all(b == sign_byte for b in padding)
