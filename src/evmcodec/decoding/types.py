"""Type descriptors consumed by the decoder.

A type descriptor is one of a closed set of frozen dataclasses; the decoder
dispatches on them with `match`. User-defined types (contracts, enums) may be
abbreviated (an id without details) and are elaborated with `full_type`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class BoolType:
    @property
    def type_class(self) -> str:
        return "bool"


@dataclass(frozen=True, slots=True)
class UintType:
    bits: int = 256

    @property
    def type_class(self) -> str:
        return "uint"


@dataclass(frozen=True, slots=True)
class IntType:
    bits: int = 256

    @property
    def type_class(self) -> str:
        return "int"


@dataclass(frozen=True, slots=True)
class AddressType:
    payable: bool = False

    @property
    def type_class(self) -> str:
        return "address"


@dataclass(frozen=True, slots=True)
class ContractType:
    """Contract type; `type_name` etc. may be missing until resolved by id."""

    id: str
    type_name: str | None = None
    contract_kind: str | None = None  # "contract", "library", "interface"
    payable: bool | None = None

    @property
    def type_class(self) -> str:
        return "contract"


@dataclass(frozen=True, slots=True)
class BytesStaticType:
    length: int

    @property
    def type_class(self) -> str:
        return "bytes"


@dataclass(frozen=True, slots=True)
class BytesDynamicType:
    @property
    def type_class(self) -> str:
        return "bytes"


@dataclass(frozen=True, slots=True)
class StringType:
    @property
    def type_class(self) -> str:
        return "string"


@dataclass(frozen=True, slots=True)
class FunctionExternalType:
    mutability: str | None = None

    @property
    def type_class(self) -> str:
        return "function"


@dataclass(frozen=True, slots=True)
class FunctionInternalType:
    mutability: str | None = None

    @property
    def type_class(self) -> str:
        return "function"


@dataclass(frozen=True, slots=True)
class EnumType:
    """Enum type; `options` is None when the option list is not known."""

    id: str
    type_name: str | None = None
    options: tuple[str, ...] | None = None

    @property
    def type_class(self) -> str:
        return "enum"


@dataclass(frozen=True, slots=True)
class FixedType:
    bits: int = 128
    places: int = 18

    @property
    def type_class(self) -> str:
        return "fixed"


@dataclass(frozen=True, slots=True)
class UfixedType:
    bits: int = 128
    places: int = 18

    @property
    def type_class(self) -> str:
        return "ufixed"


Type = Union[
    BoolType,
    UintType,
    IntType,
    AddressType,
    ContractType,
    BytesStaticType,
    BytesDynamicType,
    StringType,
    FunctionExternalType,
    FunctionInternalType,
    EnumType,
    FixedType,
    UfixedType,
]

# Registry of user-defined types keyed by id (fully elaborated descriptors).
UserDefinedTypes = Mapping[str, Type]


def full_type(data_type: Type, user_defined_types: UserDefinedTypes | None) -> Type:
    """Return the elaborated form of an abbreviated contract/enum type.

    Types that are not user-defined, or whose id is not in the registry, are
    returned unchanged.
    """
    if not isinstance(data_type, (ContractType, EnumType)) or not user_defined_types:
        return data_type
    resolved = user_defined_types.get(data_type.id)
    if resolved is None or type(resolved) is not type(data_type):
        return data_type
    return resolved


# ---- Elementary type strings ----

_INT_RE = re.compile(r"^(u?)int(\d*)$")
_BYTES_RE = re.compile(r"^bytes(\d+)$")
_FIXED_RE = re.compile(r"^(u?)fixed(?:(\d+)x(\d+))?$")


def _check_bits(bits: int, typ: str) -> int:
    if bits < 8 or bits > 256 or bits % 8:
        raise ValueError(f"Invalid bit width in type: {typ}")
    return bits


def parse_type(typ: str) -> Type:
    """Parse an elementary ABI type string into a type descriptor.

    Example inputs: "bool", "uint8", "int", "address", "bytes32", "bytes",
    "string", "function", "fixed128x18".
    """
    t = typ.strip()
    if t == "bool":
        return BoolType()
    if t in ("address", "address payable"):
        return AddressType(payable=t.endswith("payable"))
    if t == "string":
        return StringType()
    if t == "bytes":
        return BytesDynamicType()
    if t == "function":
        return FunctionExternalType()

    m = _INT_RE.match(t)
    if m:
        bits = _check_bits(int(m.group(2) or 256), typ)
        return UintType(bits) if m.group(1) else IntType(bits)

    m = _BYTES_RE.match(t)
    if m:
        length = int(m.group(1))
        if length < 1 or length > 32:
            raise ValueError(f"Invalid bytes length in type: {typ}")
        return BytesStaticType(length)

    m = _FIXED_RE.match(t)
    if m:
        bits = _check_bits(int(m.group(2) or 128), typ)
        places = int(m.group(3) or 18)
        if places > 80:
            raise ValueError(f"Invalid decimal places in type: {typ}")
        return UfixedType(bits, places) if m.group(1) else FixedType(bits, places)

    raise ValueError(f"Unsupported type: {typ}")
