"""Value decoder: raw bytes at a pointer -> typed value.

`decode_value` is a suspendable computation (see `evmcodec.decoding.requests`).
It first asks its driver for the bytes at the pointer, then dispatches on the
type descriptor. Contract and external function values suspend once more to
ask for the bytecode at an address.

Failure policy (`DecoderOptions`):
- default: failures become an `ErrorResult` where the value would have gone
- `strict_abi_mode`: failures become `StopDecoding`, which ends the whole decode
- `permissive_padding`: skip the padding checks that honor it (bool and
  internal function padding is always checked)
Malformed UTF-8 in strings is a value, never a failure.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Union

from evmcodec.constants import ADDRESS_SIZE, PC_SIZE, SELECTOR_SIZE
from evmcodec.core.config import DecoderOptions
from evmcodec.core.models import EvmInfo
from evmcodec.decoding.errors import (
    AddressPaddingError,
    BoolOutOfRangeError,
    BoolPaddingError,
    BytesPaddingError,
    ContractPaddingError,
    DecodingError,
    EnumNotFoundDecodingError,
    EnumOutOfRangeError,
    EnumPaddingError,
    ErrorResult,
    FixedPointNotYetSupportedError,
    FunctionExternalNonStackPaddingError,
    FunctionInternalPaddingError,
    IntPaddingError,
    InternalFunctionInAbiError,
    StopDecoding,
    UintPaddingError,
)
from evmcodec.decoding.functions import decode_contract, decode_external_function, decode_internal_function
from evmcodec.decoding.padding import check_padding_left, check_padding_right, check_padding_signed
from evmcodec.decoding.requests import Decoding, NeedsBytes, ReadFailure
from evmcodec.decoding.types import (
    AddressType,
    BoolType,
    BytesDynamicType,
    BytesStaticType,
    ContractType,
    EnumType,
    FixedType,
    FunctionExternalType,
    FunctionInternalType,
    IntType,
    StringType,
    Type,
    UfixedType,
    UintType,
    full_type,
)
from evmcodec.decoding.utils import to_address, to_hex_string, to_int, to_signed_int
from evmcodec.decoding.values import (
    AddressValue,
    BoolValue,
    BytesDynamicValue,
    BytesStaticValue,
    ContractValue,
    EnumValue,
    FunctionExternalValue,
    IntValue,
    Result,
    StringValue,
    StringValueInfo,
    StringValueInfoMalformed,
    StringValueInfoValid,
    UintValue,
)

logger = logging.getLogger(__name__)

Outcome = Union[Result, StopDecoding]

_DEFAULT_OPTIONS = DecoderOptions()


def _fail(data_type: Type, error: DecodingError, strict: bool) -> ErrorResult | StopDecoding:
    """Apply the failure policy."""
    if strict:
        return StopDecoding(error)
    return ErrorResult(data_type, error)


def enum_byte_count(num_options: int) -> int:
    """Bytes needed to hold an index into `num_options` options."""
    if num_options <= 1:
        return 0
    return math.ceil(math.log2(num_options) / 8)


def decode_value(
    data_type: Type,
    pointer: Any,
    info: EvmInfo,
    options: DecoderOptions = _DEFAULT_OPTIONS,
) -> Decoding[Outcome]:
    """Decode the value of type `data_type` stored at `pointer`."""
    permissive = options.permissive_padding
    strict = options.strict_abi_mode

    answer = yield NeedsBytes(pointer, info.state)
    if isinstance(answer, ReadFailure):
        logger.debug("segfault, pointer %r, state: %r", pointer, info.state)
        return _fail(data_type, answer.error, strict)
    raw = answer

    logger.debug("type %r", data_type)
    logger.debug("pointer %r", pointer)

    match data_type:
        case BoolType():
            if not check_padding_left(raw, 1):
                return _fail(data_type, BoolPaddingError(to_hex_string(raw)), strict)
            numeric = to_int(raw)
            if numeric == 0:
                return BoolValue(data_type, False)
            if numeric == 1:
                return BoolValue(data_type, True)
            return _fail(data_type, BoolOutOfRangeError(numeric), strict)

        case UintType():
            size = data_type.bits // 8
            if not permissive and not check_padding_left(raw, size):
                return _fail(data_type, UintPaddingError(to_hex_string(raw)), strict)
            return UintValue(data_type, to_int(raw[-size:]), to_int(raw))

        case IntType():
            size = data_type.bits // 8
            if not permissive and not check_padding_signed(raw, size):
                return _fail(data_type, IntPaddingError(to_hex_string(raw)), strict)
            return IntValue(data_type, to_signed_int(raw[-size:]), to_signed_int(raw))

        case AddressType():
            if not permissive and not check_padding_left(raw, ADDRESS_SIZE):
                return _fail(data_type, AddressPaddingError(to_hex_string(raw)), strict)
            return AddressValue(data_type, to_address(raw), to_hex_string(raw))

        case ContractType():
            if not permissive and not check_padding_left(raw, ADDRESS_SIZE):
                return _fail(data_type, ContractPaddingError(to_hex_string(raw)), strict)
            resolved = full_type(data_type, info.user_defined_types)
            contract_info = yield from decode_contract(raw, info)
            return ContractValue(resolved, contract_info)

        case BytesStaticType():
            if not permissive and not check_padding_right(raw, data_type.length):
                return _fail(data_type, BytesPaddingError(to_hex_string(raw)), strict)
            return BytesStaticValue(data_type, to_hex_string(raw[:data_type.length]), to_hex_string(raw))

        case BytesDynamicType():
            return BytesDynamicValue(data_type, to_hex_string(raw))

        case StringType():
            return StringValue(data_type, decode_string(raw))

        case FunctionExternalType():
            size = ADDRESS_SIZE + SELECTOR_SIZE
            if not permissive and not check_padding_right(raw, size):
                return _fail(data_type, FunctionExternalNonStackPaddingError(to_hex_string(raw)), strict)
            function_info = yield from decode_external_function(raw[:ADDRESS_SIZE], raw[ADDRESS_SIZE:size], info)
            return FunctionExternalValue(data_type, function_info)

        case FunctionInternalType():
            if strict:
                # internal function pointers never appear in ABI-encoded data
                return StopDecoding(InternalFunctionInAbiError())
            if not check_padding_left(raw, 2 * PC_SIZE):
                return ErrorResult(data_type, FunctionInternalPaddingError(to_hex_string(raw)))
            deployed_pc = to_int(raw[-PC_SIZE:])
            constructor_pc = to_int(raw[-2 * PC_SIZE:-PC_SIZE])
            return decode_internal_function(data_type, deployed_pc, constructor_pc, info)

        case EnumType():
            resolved = full_type(data_type, info.user_defined_types)
            assert isinstance(resolved, EnumType)
            if resolved.options is None:
                return _fail(resolved, EnumNotFoundDecodingError(resolved, to_int(raw)), strict)
            num_options = len(resolved.options)
            size = enum_byte_count(num_options)
            # with a single option there is no index byte; the whole word is range-checked
            if size and not permissive and not check_padding_left(raw, size):
                return _fail(resolved, EnumPaddingError(resolved, to_hex_string(raw)), strict)
            numeric = to_int(raw[len(raw) - size:]) if size else to_int(raw)
            if numeric < num_options:
                return EnumValue(resolved, numeric, resolved.options[numeric])
            return _fail(resolved, EnumOutOfRangeError(resolved, numeric), strict)

        case FixedType() | UfixedType():
            # no padding check; the type is not supported anyway
            return _fail(data_type, FixedPointNotYetSupportedError(to_hex_string(raw)), strict)

    raise RuntimeError(f"Unsupported type descriptor: {data_type!r}")


def decode_string(data: bytes) -> StringValueInfo:
    """UTF-8 text, or a malformed marker holding the bytes as bare hex."""
    try:
        return StringValueInfoValid(data.decode("utf-8"))
    except UnicodeDecodeError:
        return StringValueInfoMalformed(data.hex())
