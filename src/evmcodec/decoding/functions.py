"""Contract and function-pointer resolution.

- `decode_contract`: suspends for the bytecode at an address and identifies it
- `decode_external_function`: contract + selector -> ABI entry
- `decode_internal_function`: (deployed PC, constructor PC) -> jump-table entry
"""

from __future__ import annotations

import logging

from evmcodec.core.models import EvmInfo
from evmcodec.decoding.contexts import context_to_type, find_context_by_id, find_decoder_context
from evmcodec.decoding.errors import (
    DeployedFunctionInConstructorError,
    ErrorResult,
    MalformedInternalFunctionError,
    NoSuchInternalFunctionError,
)
from evmcodec.decoding.requests import Decoding, NeedsCode
from evmcodec.decoding.types import ContractType, FunctionInternalType
from evmcodec.decoding.utils import to_address, to_hex_string
from evmcodec.decoding.values import (
    ContractValueInfo,
    ContractValueInfoKnown,
    ContractValueInfoUnknown,
    FunctionExternalValueInfo,
    FunctionExternalValueInfoInvalid,
    FunctionExternalValueInfoKnown,
    FunctionExternalValueInfoUnknown,
    FunctionInternalValue,
    FunctionInternalValueInfoException,
    FunctionInternalValueInfoKnown,
    FunctionInternalValueInfoUnknown,
)

logger = logging.getLogger(__name__)


def decode_contract(address_bytes: bytes, info: EvmInfo) -> Decoding[ContractValueInfo]:
    """Identify the contract at an address; unmatched code yields the unknown variant."""
    address = to_address(address_bytes)
    raw_address = to_hex_string(address_bytes)
    logger.debug("requesting code at %s", address)
    code_bytes = yield NeedsCode(address)
    context = find_decoder_context(info.contexts, to_hex_string(code_bytes))
    if context is not None and context.contract_name is not None:
        return ContractValueInfoKnown(address, context_to_type(context), raw_address)
    return ContractValueInfoUnknown(address, raw_address)


def decode_external_function(
    address_bytes: bytes, selector_bytes: bytes, info: EvmInfo
) -> Decoding[FunctionExternalValueInfo]:
    """Resolve an external function pointer (address may carry left zeros, selector is 4 bytes)."""
    contract = yield from decode_contract(address_bytes, info)
    selector = to_hex_string(selector_bytes)
    if isinstance(contract, ContractValueInfoUnknown):
        return FunctionExternalValueInfoUnknown(contract, selector)
    context = find_context_by_id(info.contexts, contract.contract_class.id)
    abi_entry = None
    if context is not None and context.abi is not None:
        abi_entry = context.abi.get(selector)
    if abi_entry is None:
        return FunctionExternalValueInfoInvalid(contract, selector)
    return FunctionExternalValueInfoKnown(contract, selector, abi_entry)


def decode_internal_function(
    data_type: FunctionInternalType,
    deployed_pc: int,
    constructor_pc: int,
    info: EvmInfo,
) -> FunctionInternalValue | ErrorResult:
    """Resolve an internal function pointer against the jump table.

    Rules, first match wins:
    1. no jump table -> unknown
    2. both PCs zero -> exception (uninitialized pointer)
    3. only the deployed PC zero -> malformed
    4. constructor PC zero while in a constructor -> deployed-style pointer in constructor
    5. look up the PC for the current code; missing -> no such function,
       designated invalid -> exception, otherwise known
    """
    context = context_to_type(info.current_context)
    is_constructor = info.current_context.is_constructor

    if info.internal_functions_table is None:
        return FunctionInternalValue(
            data_type, FunctionInternalValueInfoUnknown(context, deployed_pc, constructor_pc)
        )
    if deployed_pc == 0 and constructor_pc == 0:
        return FunctionInternalValue(
            data_type, FunctionInternalValueInfoException(context, deployed_pc, constructor_pc)
        )
    if deployed_pc == 0:
        return ErrorResult(data_type, MalformedInternalFunctionError(context, constructor_pc))
    if is_constructor and constructor_pc == 0:
        return ErrorResult(data_type, DeployedFunctionInConstructorError(context, deployed_pc))

    pc = constructor_pc if is_constructor else deployed_pc
    entry = info.internal_functions_table.get(pc)
    if entry is None:
        return ErrorResult(data_type, NoSuchInternalFunctionError(context, deployed_pc, constructor_pc))
    if entry.is_designated_invalid:
        return FunctionInternalValue(
            data_type, FunctionInternalValueInfoException(context, deployed_pc, constructor_pc)
        )
    defined_in = ContractType(
        id=entry.contract_id or "",
        type_name=entry.contract_name,
        contract_kind=entry.contract_kind,
        payable=entry.contract_payable,
    )
    return FunctionInternalValue(
        data_type,
        FunctionInternalValueInfoKnown(
            context, deployed_pc, constructor_pc, entry.name or "", defined_in, entry.mutability
        ),
    )
