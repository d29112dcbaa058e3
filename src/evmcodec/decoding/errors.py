"""Decoding error variants and the two failure outcomes.

- Error variants describe *why* a value could not be decoded.
- `ErrorResult` puts an error where the decoded value would have gone
  (permissive policy); composite decodes keep going.
- `StopDecoding` is the fatal outcome of strict mode; drivers and composite
  decoders stop at the first one.
- `ReadError` is raised by byte sources; drivers turn it into a
  `ReadFailure` answer for the decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from evmcodec.decoding.types import ContractType, EnumType, Type

# ---------- read errors ----------


@dataclass(frozen=True, slots=True)
class ReadErrorStack:
    from_: int
    to: int
    kind: ClassVar[str] = "ReadErrorStack"

    @property
    def message(self) -> str:
        return f"Can't read stack from position {self.from_} to {self.to}"


@dataclass(frozen=True, slots=True)
class ReadErrorBytes:
    start: int
    length: int
    kind: ClassVar[str] = "ReadErrorBytes"

    @property
    def message(self) -> str:
        return f"Can't read {self.length} bytes from position {self.start}"


@dataclass(frozen=True, slots=True)
class ReadErrorStorage:
    slot: int
    kind: ClassVar[str] = "ReadErrorStorage"

    @property
    def message(self) -> str:
        return f"Can't read storage slot {self.slot}"


ReadErrorKind = Union[ReadErrorStack, ReadErrorBytes, ReadErrorStorage]


class ReadError(Exception):
    """Raised by a byte source when a pointer references unreadable data."""

    def __init__(self, error: ReadErrorKind) -> None:
        super().__init__(error.message)
        self.error = error


# ---------- padding errors ----------


@dataclass(frozen=True, slots=True)
class BoolPaddingError:
    raw: str  # 0x-hex of the full word
    kind: ClassVar[str] = "BoolPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for bool: {self.raw}"


@dataclass(frozen=True, slots=True)
class UintPaddingError:
    raw: str
    kind: ClassVar[str] = "UintPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for uint: {self.raw}"


@dataclass(frozen=True, slots=True)
class IntPaddingError:
    raw: str
    kind: ClassVar[str] = "IntPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid sign extension for int: {self.raw}"


@dataclass(frozen=True, slots=True)
class AddressPaddingError:
    raw: str
    kind: ClassVar[str] = "AddressPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for address: {self.raw}"


@dataclass(frozen=True, slots=True)
class ContractPaddingError:
    raw: str
    kind: ClassVar[str] = "ContractPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for contract: {self.raw}"


@dataclass(frozen=True, slots=True)
class BytesPaddingError:
    raw: str
    kind: ClassVar[str] = "BytesPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid right padding for static bytes: {self.raw}"


@dataclass(frozen=True, slots=True)
class FunctionExternalNonStackPaddingError:
    raw: str
    kind: ClassVar[str] = "FunctionExternalNonStackPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for external function pointer: {self.raw}"


@dataclass(frozen=True, slots=True)
class FunctionInternalPaddingError:
    raw: str
    kind: ClassVar[str] = "FunctionInternalPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for internal function pointer: {self.raw}"


@dataclass(frozen=True, slots=True)
class EnumPaddingError:
    type: EnumType
    raw: str
    kind: ClassVar[str] = "EnumPaddingError"

    @property
    def message(self) -> str:
        return f"Invalid padding for enum {self.type.type_name or self.type.id}: {self.raw}"


# ---------- range / lookup / unsupported errors ----------


@dataclass(frozen=True, slots=True)
class BoolOutOfRangeError:
    raw_value: int
    kind: ClassVar[str] = "BoolOutOfRangeError"

    @property
    def message(self) -> str:
        return f"Invalid boolean (numeric value {self.raw_value})"


@dataclass(frozen=True, slots=True)
class EnumOutOfRangeError:
    type: EnumType
    raw_value: int
    kind: ClassVar[str] = "EnumOutOfRangeError"

    @property
    def message(self) -> str:
        return f"Invalid {self.type.type_name or self.type.id} (numeric value {self.raw_value})"


@dataclass(frozen=True, slots=True)
class EnumNotFoundDecodingError:
    type: EnumType
    raw_value: int
    kind: ClassVar[str] = "EnumNotFoundDecodingError"

    @property
    def message(self) -> str:
        return f"Unknown enum type {self.type.id} (numeric value {self.raw_value})"


@dataclass(frozen=True, slots=True)
class FixedPointNotYetSupportedError:
    raw: str
    kind: ClassVar[str] = "FixedPointNotYetSupportedError"

    @property
    def message(self) -> str:
        return f"Fixed-point decoding is not yet supported (raw value: {self.raw})"


# ---------- internal function errors ----------


@dataclass(frozen=True, slots=True)
class MalformedInternalFunctionError:
    context: ContractType
    constructor_pc: int
    kind: ClassVar[str] = "MalformedInternalFunctionError"

    @property
    def message(self) -> str:
        return f"Malformed internal function w/constructor PC only (value: {self.constructor_pc})"


@dataclass(frozen=True, slots=True)
class DeployedFunctionInConstructorError:
    context: ContractType
    deployed_pc: int
    kind: ClassVar[str] = "DeployedFunctionInConstructorError"

    @property
    def message(self) -> str:
        return f"Deployed-style internal function (PC: {self.deployed_pc}) in constructor"


@dataclass(frozen=True, slots=True)
class NoSuchInternalFunctionError:
    context: ContractType
    deployed_pc: int
    constructor_pc: int
    kind: ClassVar[str] = "NoSuchInternalFunctionError"

    @property
    def message(self) -> str:
        return (
            f"Invalid function (Deployed PC: {self.deployed_pc}, "
            f"constructor PC: {self.constructor_pc}) of contract {self.context.type_name}"
        )


@dataclass(frozen=True, slots=True)
class InternalFunctionInAbiError:
    kind: ClassVar[str] = "InternalFunctionInAbiError"

    @property
    def message(self) -> str:
        return "Internal functions cannot be ABI-encoded"


DecodingError = Union[
    ReadErrorStack,
    ReadErrorBytes,
    ReadErrorStorage,
    BoolPaddingError,
    UintPaddingError,
    IntPaddingError,
    AddressPaddingError,
    ContractPaddingError,
    BytesPaddingError,
    FunctionExternalNonStackPaddingError,
    FunctionInternalPaddingError,
    EnumPaddingError,
    BoolOutOfRangeError,
    EnumOutOfRangeError,
    EnumNotFoundDecodingError,
    FixedPointNotYetSupportedError,
    MalformedInternalFunctionError,
    DeployedFunctionInConstructorError,
    NoSuchInternalFunctionError,
    InternalFunctionInAbiError,
]


# ---------- outcomes ----------


@dataclass(frozen=True, slots=True)
class ErrorResult:
    """A failed decode, tagged with the type it was decoded against."""

    data_type: Type
    error: DecodingError

    @property
    def type_class(self) -> str:
        return self.data_type.type_class


@dataclass(frozen=True, slots=True)
class StopDecoding:
    """Fatal strict-mode outcome: the whole decode (and its parents) stops."""

    error: DecodingError
