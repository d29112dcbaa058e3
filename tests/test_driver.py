from typing import Any

import pytest
from eth_utils import to_checksum_address

from evmcodec.core.config import DecoderOptions
from evmcodec.core.models import EvmInfo, EvmState
from evmcodec.decoding.decoder import decode_value
from evmcodec.decoding.driver import adecode, decode_members, run_decoder
from evmcodec.decoding.errors import ErrorResult, ReadErrorBytes, StopDecoding, UintPaddingError
from evmcodec.decoding.read import CalldataPointer, StackLiteralPointer
from evmcodec.decoding.requests import DecodeSession, Done, NeedsBytes, NeedsCode, ReadFailure
from evmcodec.decoding.types import BoolType, ContractType, UintType
from evmcodec.decoding.values import BoolValue, ContractValue, ContractValueInfoKnown, UintValue

from conftest import TOKEN_ADDRESS, TOKEN_CODE

TOKEN_WORD = bytes(12) + bytes.fromhex(TOKEN_ADDRESS[2:])


def test_session_requests_bytes_then_code(info: EvmInfo) -> None:
    pointer = StackLiteralPointer(TOKEN_WORD)
    session = DecodeSession(decode_value(ContractType("Token"), pointer, info))

    step = session.start()
    assert step == NeedsBytes(pointer, info.state)

    step = session.resume(TOKEN_WORD)
    assert step == NeedsCode(to_checksum_address(TOKEN_ADDRESS))

    step = session.resume(TOKEN_CODE)
    assert isinstance(step, Done)
    assert isinstance(step.outcome, ContractValue)
    assert isinstance(step.outcome.info, ContractValueInfoKnown)


def test_session_answers_bytes_only_once_for_elementary_types(info: EvmInfo) -> None:
    session = DecodeSession(decode_value(UintType(8), object(), info))
    assert isinstance(session.start(), NeedsBytes)
    step = session.resume(bytes(31) + b"\x05")
    assert step == Done(UintValue(UintType(8), 5, 5))
    with pytest.raises(RuntimeError):
        session.resume(b"")


def test_session_read_failure_answer(info: EvmInfo) -> None:
    session = DecodeSession(decode_value(BoolType(), object(), info))
    session.start()
    step = session.resume(ReadFailure(ReadErrorBytes(-1, 32)))
    assert step == Done(ErrorResult(BoolType(), ReadErrorBytes(-1, 32)))


def test_session_must_start_first(info: EvmInfo) -> None:
    session = DecodeSession(decode_value(BoolType(), object(), info))
    with pytest.raises(RuntimeError):
        session.resume(b"")


def test_custom_reader(info: EvmInfo) -> None:
    class FixedReader:
        def __init__(self) -> None:
            self.calls: list[Any] = []

        def read(self, pointer: Any, state: EvmState) -> bytes:
            self.calls.append(pointer)
            return bytes(31) + b"\x01"

    reader = FixedReader()
    result = run_decoder(decode_value(BoolType(), "slot-7", info), reader=reader)
    assert result == BoolValue(BoolType(), True)
    assert reader.calls == ["slot-7"]


@pytest.mark.asyncio
async def test_adecode_uses_code_provider(info: EvmInfo, mock_rpc: Any) -> None:
    mock_rpc.get_code.return_value = TOKEN_CODE
    result = await adecode(ContractType("Token"), StackLiteralPointer(TOKEN_WORD), info, code_provider=mock_rpc)
    assert isinstance(result, ContractValue)
    assert isinstance(result.info, ContractValueInfoKnown)
    mock_rpc.get_code.assert_awaited_once_with(to_checksum_address(TOKEN_ADDRESS))


@pytest.mark.asyncio
async def test_adecode_without_code_provider(info: EvmInfo) -> None:
    result = await adecode(UintType(16), StackLiteralPointer(bytes(30) + b"\x01\x00"), info)
    assert result == UintValue(UintType(16), 256, 256)


# ---------- composite decoding ----------


def calldata_info(info: EvmInfo, calldata: bytes) -> EvmInfo:
    return EvmInfo(state=EvmState(calldata=calldata), current_context=info.current_context, contexts=info.contexts)


def test_decode_members_keeps_sibling_errors_local(info: EvmInfo) -> None:
    bad = bytes(30) + b"\x01\x05"
    good = bytes(31) + b"\x01"
    evm_info = calldata_info(info, bad + good)
    members = [
        ("a", UintType(8), CalldataPointer(0)),
        ("b", BoolType(), CalldataPointer(32)),
    ]
    result = run_decoder(decode_members(members, evm_info))
    assert result == [
        ("a", ErrorResult(UintType(8), UintPaddingError("0x" + bad.hex()))),
        ("b", BoolValue(BoolType(), True)),
    ]


def test_decode_members_strict_stops_everything(info: EvmInfo) -> None:
    bad = bytes(30) + b"\x01\x05"
    evm_info = calldata_info(info, bad + bytes(32))
    members = [
        ("a", UintType(8), CalldataPointer(0)),
        ("b", BoolType(), CalldataPointer(32)),
    ]
    session = DecodeSession(decode_members(members, evm_info, DecoderOptions(strict_abi_mode=True)))
    step = session.start()
    assert step == NeedsBytes(CalldataPointer(0), evm_info.state)
    step = session.resume(bad)
    # second member is never requested
    assert step == Done(StopDecoding(UintPaddingError("0x" + bad.hex())))
