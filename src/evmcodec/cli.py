import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from evmcodec.decoding.errors import ErrorResult, StopDecoding
from evmcodec.decoding.values import (
    AddressValue,
    BoolValue,
    BytesDynamicValue,
    BytesStaticValue,
    ContractValue,
    ContractValueInfoKnown,
    EnumValue,
    FunctionExternalValue,
    FunctionExternalValueInfoKnown,
    FunctionInternalValue,
    FunctionInternalValueInfoKnown,
    IntValue,
    StringValue,
    StringValueInfoValid,
    UintValue,
)

console = Console()


def render(result) -> str:
    """One-line human-readable rendering of a decode result."""
    match result:
        case ErrorResult():
            return f"[red]error[/] ({result.error.kind}): {result.error.message}"
        case BoolValue() | UintValue() | IntValue() | AddressValue() | BytesStaticValue() | BytesDynamicValue():
            return str(result.value)
        case EnumValue():
            return f"{result.data_type.type_name or result.data_type.id}.{result.name} ({result.numeric})"
        case StringValue():
            if isinstance(result.info, StringValueInfoValid):
                return repr(result.info.text)
            return f"malformed string 0x{result.info.hex}"
        case ContractValue():
            if isinstance(result.info, ContractValueInfoKnown):
                return f"{result.info.contract_class.type_name}({result.info.address})"
            return f"unknown contract {result.info.address}"
        case FunctionExternalValue():
            info = result.info
            if isinstance(info, FunctionExternalValueInfoKnown):
                return f"{info.contract.contract_class.type_name}({info.contract.address}).{info.abi.name}"
            return f"{info.contract.address}:{info.selector} ({type(info).__name__.removeprefix('FunctionExternalValueInfo').lower()})"
        case FunctionInternalValue():
            info = result.info
            if isinstance(info, FunctionInternalValueInfoKnown):
                return f"{info.defined_in.type_name}.{info.name}"
            kind = type(info).__name__.removeprefix("FunctionInternalValueInfo").lower()
            return f"internal function {kind} (deployed PC {info.deployed_pc}, constructor PC {info.constructor_pc})"
    return repr(result)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log decoder internals")
def cli(verbose: bool) -> None:
    """evmcodec: decode ABI-encoded EVM words into typed values."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@cli.command("decode")
@click.option("--type", "type_", required=True, help="Elementary ABI type, e.g. uint8, bool, bytes32")
@click.option("--hex", "hex_data", required=True, help="Encoded word(s) as hex")
@click.option("--permissive-padding/--no-permissive-padding", default=False, show_default=True)
@click.option("--strict/--no-strict", default=False, show_default=True, help="Abort on any decoding error")
@click.option("--rpc", "rpc_url", type=str, default=None, help="RPC endpoint used to identify contracts")
@click.option(
    "--contexts",
    "contexts_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file of known contract contexts",
)
def decode_cmd(
    type_: str,
    hex_data: str,
    permissive_padding: bool,
    strict: bool,
    rpc_url: str | None,
    contexts_path: Path | None,
) -> None:
    """Decode one stack-literal value and print it."""
    from eth_utils import decode_hex

    from evmcodec.abi.contexts import load_contexts
    from evmcodec.core.config import DecodeCommandConfig, DecoderOptions
    from evmcodec.core.models import DecoderContext, EvmInfo, EvmState
    from evmcodec.decoding.driver import adecode
    from evmcodec.decoding.read import StackLiteralPointer
    from evmcodec.decoding.types import parse_type

    config = DecodeCommandConfig(
        type=type_,
        hex_data=hex_data,
        options=DecoderOptions(permissive_padding=permissive_padding, strict_abi_mode=strict),
        rpc_url=rpc_url,
        contexts_path=contexts_path,
    )

    try:
        data_type = parse_type(config.type)
        data = decode_hex(config.hex_data)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    info = EvmInfo(
        state=EvmState(),
        current_context=DecoderContext(context_hash="0x", binary="0x"),
        contexts=load_contexts(config.contexts_path) if config.contexts_path else {},
    )

    async def run():
        from evmcodec.clients.rpc import RPC

        rpc = RPC(config.rpc_url, timeout_s=config.timeout_s) if config.rpc_url else None
        try:
            return await adecode(data_type, StackLiteralPointer(data), info, config.options, code_provider=rpc)
        finally:
            if rpc is not None:
                await rpc.aclose()

    try:
        outcome = asyncio.run(run())
    except RuntimeError as e:
        raise click.ClickException(str(e)) from e

    if isinstance(outcome, StopDecoding):
        raise click.ClickException(f"decoding stopped: {outcome.error.message}")
    console.print(f"[bold]{type_}[/]: {render(outcome)}")
