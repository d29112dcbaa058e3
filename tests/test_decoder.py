import pytest
from eth_utils import to_checksum_address

from evmcodec.core.config import DecoderOptions
from evmcodec.core.models import EvmInfo
from evmcodec.decoding.decoder import decode_string, enum_byte_count
from evmcodec.decoding.driver import decode
from evmcodec.decoding.errors import (
    AddressPaddingError,
    BoolOutOfRangeError,
    BoolPaddingError,
    BytesPaddingError,
    EnumNotFoundDecodingError,
    EnumOutOfRangeError,
    EnumPaddingError,
    ErrorResult,
    FixedPointNotYetSupportedError,
    IntPaddingError,
    ReadErrorStack,
    StopDecoding,
    UintPaddingError,
)
from evmcodec.decoding.read import StackLiteralPointer, StackPointer
from evmcodec.decoding.types import (
    AddressType,
    BoolType,
    BytesDynamicType,
    BytesStaticType,
    EnumType,
    FixedType,
    IntType,
    StringType,
    UfixedType,
    UintType,
)
from evmcodec.decoding.values import (
    AddressValue,
    BoolValue,
    BytesDynamicValue,
    BytesStaticValue,
    EnumValue,
    IntValue,
    StringValue,
    StringValueInfoMalformed,
    StringValueInfoValid,
    UintValue,
)

STRICT = DecoderOptions(strict_abi_mode=True)
PERMISSIVE = DecoderOptions(permissive_padding=True)


def lit(data: bytes) -> StackLiteralPointer:
    return StackLiteralPointer(data)


# ---------- scenarios ----------


def test_uint8_value(info: EvmInfo) -> None:
    result = decode(UintType(8), lit(bytes(31) + b"\x05"), info)
    assert result == UintValue(UintType(8), 5, 5)


def test_uint8_bad_padding(info: EvmInfo) -> None:
    data = bytes(30) + b"\x01\x05"
    result = decode(UintType(8), lit(data), info)
    assert isinstance(result, ErrorResult)
    assert result.data_type == UintType(8)
    assert result.error == UintPaddingError("0x" + data.hex())

    stopped = decode(UintType(8), lit(data), info, STRICT)
    assert stopped == StopDecoding(UintPaddingError("0x" + data.hex()))


def test_uint8_permissive_padding_truncates(info: EvmInfo) -> None:
    data = bytes(30) + b"\x01\x05"
    result = decode(UintType(8), lit(data), info, PERMISSIVE)
    assert isinstance(result, UintValue)
    assert result.value == 5
    assert result.raw_value == 0x0105


def test_bool_out_of_range(info: EvmInfo) -> None:
    result = decode(BoolType(), lit(bytes(31) + b"\x02"), info)
    assert result == ErrorResult(BoolType(), BoolOutOfRangeError(2))


# ---------- per type class ----------


@pytest.mark.parametrize("bits", range(8, 257, 8))
def test_uint_all_widths(info: EvmInfo, bits: int) -> None:
    size = bits // 8
    value_bytes = b"\x80" + b"\x01" * (size - 1)
    data = value_bytes.rjust(32, b"\x00")
    result = decode(UintType(bits), lit(data), info)
    assert isinstance(result, UintValue)
    assert result.value == int.from_bytes(value_bytes, "big")

    if size < 32:
        dirty = b"\x01" + data[1:]
        assert isinstance(decode(UintType(bits), lit(dirty), info), ErrorResult)
        assert isinstance(decode(UintType(bits), lit(dirty), info, PERMISSIVE), UintValue)


def test_bool_values(info: EvmInfo) -> None:
    assert decode(BoolType(), lit(bytes(32)), info) == BoolValue(BoolType(), False)
    assert decode(BoolType(), lit(bytes(31) + b"\x01"), info) == BoolValue(BoolType(), True)


def test_bool_padding_ignores_permissive_flag(info: EvmInfo) -> None:
    data = b"\x01" + bytes(30) + b"\x01"
    result = decode(BoolType(), lit(data), info, PERMISSIVE)
    assert result == ErrorResult(BoolType(), BoolPaddingError("0x" + data.hex()))


def test_bool_out_of_range_strict(info: EvmInfo) -> None:
    result = decode(BoolType(), lit(bytes(31) + b"\x02"), info, STRICT)
    assert result == StopDecoding(BoolOutOfRangeError(2))


def test_int_negative(info: EvmInfo) -> None:
    result = decode(IntType(8), lit(b"\xff" * 32), info)
    assert result == IntValue(IntType(8), -1, -1)


def test_int_positive_with_sign_bit_clear(info: EvmInfo) -> None:
    result = decode(IntType(16), lit(bytes(30) + b"\x7f\xff"), info)
    assert isinstance(result, IntValue)
    assert result.value == 0x7FFF


def test_int_bad_sign_extension(info: EvmInfo) -> None:
    # negative int8 without sign extension
    data = bytes(31) + b"\x80"
    result = decode(IntType(8), lit(data), info)
    assert result == ErrorResult(IntType(8), IntPaddingError("0x" + data.hex()))

    permissive = decode(IntType(8), lit(data), info, PERMISSIVE)
    assert isinstance(permissive, IntValue)
    assert permissive.value == -128
    assert permissive.raw_value == 128


def test_address(info: EvmInfo) -> None:
    addr = bytes.fromhex("d8da6bf26964af9d7eed9e03e53415d37aa96045")
    data = bytes(12) + addr
    result = decode(AddressType(), lit(data), info)
    assert result == AddressValue(AddressType(), to_checksum_address("0x" + addr.hex()), "0x" + data.hex())


def test_address_bad_padding(info: EvmInfo) -> None:
    data = b"\x01" + bytes(11) + b"\x22" * 20
    result = decode(AddressType(), lit(data), info)
    assert isinstance(result, ErrorResult)
    assert isinstance(result.error, AddressPaddingError)


def test_bytes_static(info: EvmInfo) -> None:
    data = b"\xab\xcd" + bytes(30)
    result = decode(BytesStaticType(2), lit(data), info)
    assert result == BytesStaticValue(BytesStaticType(2), "0xabcd", "0x" + data.hex())


def test_bytes_static_bad_right_padding(info: EvmInfo) -> None:
    data = b"\xab\xcd" + bytes(29) + b"\x01"
    result = decode(BytesStaticType(2), lit(data), info)
    assert result == ErrorResult(BytesStaticType(2), BytesPaddingError("0x" + data.hex()))
    assert isinstance(decode(BytesStaticType(2), lit(data), info, PERMISSIVE), BytesStaticValue)


def test_bytes_dynamic(info: EvmInfo) -> None:
    result = decode(BytesDynamicType(), lit(b"\x00\x01\x02"), info)
    assert result == BytesDynamicValue(BytesDynamicType(), "0x000102")


def test_string(info: EvmInfo) -> None:
    result = decode(StringType(), lit("héllo".encode()), info)
    assert result == StringValue(StringType(), StringValueInfoValid("héllo"))


def test_malformed_string_is_not_an_error(info: EvmInfo) -> None:
    result = decode(StringType(), lit(b"\x80"), info, STRICT)
    assert result == StringValue(StringType(), StringValueInfoMalformed("80"))


def test_decode_string() -> None:
    assert decode_string(b"") == StringValueInfoValid("")
    assert decode_string(b"abc") == StringValueInfoValid("abc")
    assert decode_string(b"\xc3") == StringValueInfoMalformed("c3")
    # UTF-16 surrogate encoded as UTF-8 is not valid UTF-8
    assert decode_string(b"\xed\xa0\x80") == StringValueInfoMalformed("eda080")


# ---------- enums ----------


@pytest.mark.parametrize(
    ("count", "expected"),
    [(1, 0), (2, 1), (3, 1), (256, 1), (257, 2), (65536, 2), (65537, 3)],
)
def test_enum_byte_count(count: int, expected: int) -> None:
    assert enum_byte_count(count) == expected


def test_enum_value(info: EvmInfo) -> None:
    enum = EnumType("Color", "Color", ("Red", "Green", "Blue"))
    result = decode(enum, lit(bytes(31) + b"\x02"), info)
    assert result == EnumValue(enum, 2, "Blue")


def test_enum_out_of_range(info: EvmInfo) -> None:
    enum = EnumType("Color", "Color", ("Red", "Green", "Blue"))
    result = decode(enum, lit(bytes(31) + b"\x03"), info)
    assert result == ErrorResult(enum, EnumOutOfRangeError(enum, 3))
    assert decode(enum, lit(bytes(31) + b"\x03"), info, STRICT) == StopDecoding(EnumOutOfRangeError(enum, 3))


def test_enum_bad_padding(info: EvmInfo) -> None:
    enum = EnumType("Color", "Color", ("Red", "Green", "Blue"))
    data = bytes(30) + b"\x01\x00"
    result = decode(enum, lit(data), info)
    assert result == ErrorResult(enum, EnumPaddingError(enum, "0x" + data.hex()))


def test_enum_single_option(info: EvmInfo) -> None:
    enum = EnumType("Only", "Only", ("One",))
    assert decode(enum, lit(bytes(32)), info) == EnumValue(enum, 0, "One")
    assert decode(enum, lit(bytes(31) + b"\x01"), info) == ErrorResult(enum, EnumOutOfRangeError(enum, 1))


def test_enum_resolved_through_user_defined_types(info: EvmInfo) -> None:
    full = EnumType("E1", "State", ("Open", "Closed"))
    resolved_info = EvmInfo(
        state=info.state,
        current_context=info.current_context,
        user_defined_types={"E1": full},
    )
    result = decode(EnumType("E1"), lit(bytes(31) + b"\x01"), resolved_info)
    assert result == EnumValue(full, 1, "Closed")


def test_enum_without_options(info: EvmInfo) -> None:
    enum = EnumType("Missing")
    result = decode(enum, lit(bytes(31) + b"\x00"), info)
    assert result == ErrorResult(enum, EnumNotFoundDecodingError(enum, 0))
    assert decode(enum, lit(bytes(31) + b"\x07"), info, STRICT) == StopDecoding(EnumNotFoundDecodingError(enum, 7))


# ---------- unsupported / read failures ----------


@pytest.mark.parametrize("data_type", [FixedType(), UfixedType(64, 10)])
def test_fixed_point_not_supported(info: EvmInfo, data_type: FixedType | UfixedType) -> None:
    result = decode(data_type, lit(bytes(32)), info)
    assert result == ErrorResult(data_type, FixedPointNotYetSupportedError("0x" + "00" * 32))
    assert isinstance(decode(data_type, lit(bytes(32)), info, STRICT), StopDecoding)


def test_read_failure(info: EvmInfo) -> None:
    result = decode(UintType(256), StackPointer(0, 0), info)
    assert result == ErrorResult(UintType(256), ReadErrorStack(0, 0))


def test_read_failure_strict(info: EvmInfo) -> None:
    result = decode(UintType(256), StackPointer(3, 4), info, STRICT)
    assert result == StopDecoding(ReadErrorStack(3, 4))
