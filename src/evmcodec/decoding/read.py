"""Reference byte source: dereference data pointers against an `EvmState`.

Pointers:
- `StackLiteralPointer`: bytes already taken off the stack.
- `StackPointer`: a range of stack words (inclusive, 0 = bottom).
- `MemoryPointer` / `CalldataPointer`: byte ranges, zero-extended past the end.
- `StoragePointer`: one 32-byte storage slot (unset slots read as zero).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from evmcodec.constants import WORD_SIZE
from evmcodec.decoding.errors import ReadError, ReadErrorBytes, ReadErrorStack, ReadErrorStorage

if TYPE_CHECKING:
    from evmcodec.core.models import EvmState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StackLiteralPointer:
    literal: bytes


@dataclass(frozen=True, slots=True)
class StackPointer:
    from_: int
    to: int


@dataclass(frozen=True, slots=True)
class MemoryPointer:
    start: int
    length: int = WORD_SIZE


@dataclass(frozen=True, slots=True)
class CalldataPointer:
    start: int
    length: int = WORD_SIZE


@dataclass(frozen=True, slots=True)
class StoragePointer:
    slot: int


DataPointer = Union[StackLiteralPointer, StackPointer, MemoryPointer, CalldataPointer, StoragePointer]


def _read_bytes(region: bytes, start: int, length: int) -> bytes:
    if start < 0 or length < 0:
        raise ReadError(ReadErrorBytes(start, length))
    return region[start:start + length].ljust(length, b"\x00")


def read(pointer: DataPointer, state: EvmState) -> bytes:
    """Return the bytes `pointer` references; raise `ReadError` if unreadable."""
    match pointer:
        case StackLiteralPointer():
            return pointer.literal
        case StackPointer():
            if pointer.from_ < 0 or pointer.to >= len(state.stack) or pointer.from_ > pointer.to:
                raise ReadError(ReadErrorStack(pointer.from_, pointer.to))
            return b"".join(state.stack[pointer.from_:pointer.to + 1])
        case MemoryPointer():
            return _read_bytes(state.memory, pointer.start, pointer.length)
        case CalldataPointer():
            return _read_bytes(state.calldata, pointer.start, pointer.length)
        case StoragePointer():
            if pointer.slot < 0:
                raise ReadError(ReadErrorStorage(pointer.slot))
            word = state.storage.get(pointer.slot, b"")
            return word.rjust(WORD_SIZE, b"\x00")
    raise TypeError(f"Unsupported pointer type: {type(pointer).__name__}")


class ByteReader:
    """`IByteSource` over the reference `read` function."""

    def read(self, pointer: DataPointer, state: EvmState) -> bytes:
        data = read(pointer, state)
        logger.debug("read %d bytes at %r", len(data), pointer)
        return data
