"""Decoded values.

One frozen dataclass per type class, each tagged with the type descriptor it
was decoded against. Contract, string and function values carry an `info`
object whose variant records how far resolution got (known / unknown /
invalid / exception / malformed).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from evmcodec.abi.models import AbiFunction
from evmcodec.decoding.errors import ErrorResult
from evmcodec.decoding.types import (
    AddressType,
    BoolType,
    BytesDynamicType,
    BytesStaticType,
    ContractType,
    EnumType,
    FunctionExternalType,
    FunctionInternalType,
    IntType,
    StringType,
    UintType,
)

# ---------- elementary values ----------


@dataclass(frozen=True, slots=True)
class BoolValue:
    data_type: BoolType
    value: bool


@dataclass(frozen=True, slots=True)
class UintValue:
    data_type: UintType
    value: int
    raw_value: int  # full word, unsigned


@dataclass(frozen=True, slots=True)
class IntValue:
    data_type: IntType
    value: int
    raw_value: int  # full word, signed


@dataclass(frozen=True, slots=True)
class AddressValue:
    data_type: AddressType
    value: str  # checksummed
    raw: str  # 0x-hex of the full word


@dataclass(frozen=True, slots=True)
class BytesStaticValue:
    data_type: BytesStaticType
    value: str  # 0x-hex, truncated to the declared length
    raw: str


@dataclass(frozen=True, slots=True)
class BytesDynamicValue:
    data_type: BytesDynamicType
    value: str


@dataclass(frozen=True, slots=True)
class EnumValue:
    data_type: EnumType
    numeric: int
    name: str


# ---------- strings ----------


@dataclass(frozen=True, slots=True)
class StringValueInfoValid:
    text: str


@dataclass(frozen=True, slots=True)
class StringValueInfoMalformed:
    """Bytes that are not valid UTF-8; `hex` holds them without 0x prefix."""

    hex: str


StringValueInfo = Union[StringValueInfoValid, StringValueInfoMalformed]


@dataclass(frozen=True, slots=True)
class StringValue:
    data_type: StringType
    info: StringValueInfo


# ---------- contracts ----------


@dataclass(frozen=True, slots=True)
class ContractValueInfoKnown:
    address: str
    contract_class: ContractType
    raw_address: str


@dataclass(frozen=True, slots=True)
class ContractValueInfoUnknown:
    address: str
    raw_address: str


ContractValueInfo = Union[ContractValueInfoKnown, ContractValueInfoUnknown]


@dataclass(frozen=True, slots=True)
class ContractValue:
    data_type: ContractType
    info: ContractValueInfo


# ---------- external functions ----------


@dataclass(frozen=True, slots=True)
class FunctionExternalValueInfoKnown:
    contract: ContractValueInfoKnown
    selector: str
    abi: AbiFunction


@dataclass(frozen=True, slots=True)
class FunctionExternalValueInfoInvalid:
    """Contract is known but the selector is not part of its interface."""

    contract: ContractValueInfoKnown
    selector: str


@dataclass(frozen=True, slots=True)
class FunctionExternalValueInfoUnknown:
    contract: ContractValueInfoUnknown
    selector: str


FunctionExternalValueInfo = Union[
    FunctionExternalValueInfoKnown,
    FunctionExternalValueInfoInvalid,
    FunctionExternalValueInfoUnknown,
]


@dataclass(frozen=True, slots=True)
class FunctionExternalValue:
    data_type: FunctionExternalType
    info: FunctionExternalValueInfo


# ---------- internal functions ----------


@dataclass(frozen=True, slots=True)
class FunctionInternalValueInfoKnown:
    context: ContractType
    deployed_pc: int
    constructor_pc: int
    name: str
    defined_in: ContractType
    mutability: str | None


@dataclass(frozen=True, slots=True)
class FunctionInternalValueInfoException:
    """Zero pointer or designated-invalid target: calling it reverts."""

    context: ContractType
    deployed_pc: int
    constructor_pc: int


@dataclass(frozen=True, slots=True)
class FunctionInternalValueInfoUnknown:
    context: ContractType
    deployed_pc: int
    constructor_pc: int


FunctionInternalValueInfo = Union[
    FunctionInternalValueInfoKnown,
    FunctionInternalValueInfoException,
    FunctionInternalValueInfoUnknown,
]


@dataclass(frozen=True, slots=True)
class FunctionInternalValue:
    data_type: FunctionInternalType
    info: FunctionInternalValueInfo


Value = Union[
    BoolValue,
    UintValue,
    IntValue,
    AddressValue,
    ContractValue,
    BytesStaticValue,
    BytesDynamicValue,
    StringValue,
    FunctionExternalValue,
    FunctionInternalValue,
    EnumValue,
]

Result = Union[Value, ErrorResult]
