import asyncio

from evmcodec.clients.rpc import RPC
from evmcodec.core.models import DecoderContext, EvmInfo, EvmState
from evmcodec.decoding.driver import arun_decoder, decode_members
from evmcodec.decoding.errors import StopDecoding
from evmcodec.decoding.read import CalldataPointer
from evmcodec.decoding.types import ContractType, UintType

# transfer(address,uint256) calldata sending 1 USDC to the WETH contract on Base
CALLDATA = bytes.fromhex(
    "a9059cbb"
    "0000000000000000000000004200000000000000000000000000000000000006"
    "00000000000000000000000000000000000000000000000000000000000f4240"
)

info = EvmInfo(
    state=EvmState(calldata=CALLDATA),
    current_context=DecoderContext(context_hash="0x", binary="0x"),
)

members = [
    ("to", ContractType("WETH"), CalldataPointer(4)),
    ("amount", UintType(256), CalldataPointer(36)),
]


async def main():
    rpc = RPC("https://base-rpc.publicnode.com")
    try:
        result = await arun_decoder(decode_members(members, info), code_provider=rpc)
    finally:
        await rpc.aclose()

    if isinstance(result, StopDecoding):
        print("stopped:", result.error.message)
        return
    for name, value in result:
        print(name, value)


asyncio.run(main())
