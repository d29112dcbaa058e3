"""Execution-state models consumed by the decoder.

This module defines:
- `EvmState`: the raw byte regions a pointer can reference.
- `DecoderContext`: metadata for one recognized bytecode (name, kind, ABI).
- `InternalFunctionEntry`: one jump-table entry for internal function pointers.
- `EvmInfo`: the read-only bundle handed to every decode call.

Design notes
------------
- Everything here is treated as an immutable snapshot for one decode session;
  the decoder never mutates it.
- Contexts are keyed by their context hash (keccak of the normalized binary).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from evmcodec.abi.models import AbiFunction

if TYPE_CHECKING:
    from evmcodec.decoding.types import UserDefinedTypes


@dataclass(slots=True, frozen=True)
class EvmState:
    """Byte regions of the current call."""

    stack: tuple[bytes, ...] = ()  # 32-byte words, bottom first
    memory: bytes = b""
    calldata: bytes = b""
    storage: Mapping[int, bytes] = field(default_factory=dict)  # slot -> 32-byte word


@dataclass(slots=True, frozen=True)
class DecoderContext:
    """Metadata associated with one recognized bytecode fingerprint."""

    context_hash: str
    binary: str  # lowercased 0x-hex, may contain unlinked library placeholders
    contract_id: str | None = None
    contract_name: str | None = None
    contract_kind: str | None = None
    payable: bool | None = None
    is_constructor: bool = False
    abi: Mapping[str, AbiFunction] | None = None  # selector (0x-hex) -> entry


@dataclass(slots=True, frozen=True)
class InternalFunctionEntry:
    """What sits at one jump destination used as an internal function pointer."""

    name: str | None = None
    mutability: str | None = None
    contract_id: str | None = None
    contract_name: str | None = None
    contract_kind: str | None = None
    contract_payable: bool | None = None
    is_designated_invalid: bool = False


InternalFunctionsTable = Mapping[int, InternalFunctionEntry]


@dataclass(slots=True, frozen=True)
class EvmInfo:
    """Read-only context for one decode session."""

    state: EvmState
    current_context: DecoderContext
    contexts: Mapping[str, DecoderContext] = field(default_factory=dict)
    internal_functions_table: InternalFunctionsTable | None = None
    user_defined_types: UserDefinedTypes | None = None
