from unittest.mock import AsyncMock

import pytest

from evmcodec.abi import make_abi_table
from evmcodec.core.models import DecoderContext, EvmInfo, EvmState, InternalFunctionEntry
from evmcodec.decoding.contexts import make_context

TOKEN_ADDRESS = "0x1234567890123456789012345678901234567890"
TOKEN_CODE = bytes.fromhex("6080604052348015600f57600080fd5b50")

TOKEN_ABI = [
    {
        "type": "function",
        "name": "transfer",
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [],
    },
]


@pytest.fixture
def mock_rpc():
    rpc = AsyncMock()
    rpc.get_code = AsyncMock(return_value=b"")
    rpc.aclose = AsyncMock()
    return rpc


@pytest.fixture
def current_context() -> DecoderContext:
    return make_context("0x6001", contract_name="Current", contract_kind="contract", payable=False)


@pytest.fixture
def token_context() -> DecoderContext:
    return make_context("0x" + TOKEN_CODE.hex(), contract_name="Token", abi=make_abi_table(TOKEN_ABI))


@pytest.fixture
def info(current_context: DecoderContext, token_context: DecoderContext) -> EvmInfo:
    return EvmInfo(
        state=EvmState(),
        current_context=current_context,
        contexts={token_context.context_hash: token_context, current_context.context_hash: current_context},
    )


@pytest.fixture
def jump_table() -> dict[int, InternalFunctionEntry]:
    return {
        10: InternalFunctionEntry(
            name="helper",
            mutability="pure",
            contract_id="Current",
            contract_name="Current",
            contract_kind="contract",
            contract_payable=False,
        ),
        20: InternalFunctionEntry(is_designated_invalid=True),
        30: InternalFunctionEntry(
            name="init",
            mutability="nonpayable",
            contract_id="Current",
            contract_name="Current",
            contract_kind="contract",
        ),
    }
