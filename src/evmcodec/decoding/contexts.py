"""Known-contexts registry helpers.

- `make_context`: build a `DecoderContext` keyed by the hash of its binary
- `find_decoder_context`: match fetched bytecode against known contexts
- `find_context_by_id`: look a context up by contract id
- `context_to_type`: contract type descriptor for a context
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import lru_cache

from eth_utils import keccak

from evmcodec.abi.models import AbiFunction
from evmcodec.core.models import DecoderContext
from evmcodec.decoding.types import ContractType

# Unlinked library references are 40 hex characters wide and start with "__".
_LINK_PLACEHOLDER = re.compile(r"__.{38}")


def normalize_binary(binary: str) -> str:
    """Lowercase 0x-prefixed hex."""
    b = binary.strip().lower()
    return b if b.startswith("0x") else "0x" + b


def binary_hash(binary: str) -> str:
    """Context hash of a binary (keccak of its normalized hex text)."""
    return "0x" + keccak(text=normalize_binary(binary)).hex()


def make_context(
    binary: str,
    *,
    contract_id: str | None = None,
    contract_name: str | None = None,
    contract_kind: str | None = "contract",
    payable: bool | None = None,
    is_constructor: bool = False,
    abi: Mapping[str, AbiFunction] | None = None,
) -> DecoderContext:
    """Build a `DecoderContext`; the contract id defaults to the contract name."""
    normalized = normalize_binary(binary)
    return DecoderContext(
        context_hash=binary_hash(normalized),
        binary=normalized,
        contract_id=contract_id if contract_id is not None else contract_name,
        contract_name=contract_name,
        contract_kind=contract_kind,
        payable=payable,
        is_constructor=is_constructor,
        abi=abi,
    )


@lru_cache(maxsize=1024)
def _binary_pattern(binary: str, is_constructor: bool) -> re.Pattern[str]:
    parts = _LINK_PLACEHOLDER.split(binary[2:])
    body = "[0-9a-f]{40}".join(re.escape(part) for part in parts)
    # constructor bytecode is followed by its ABI-encoded arguments
    tail = "(?:[0-9a-f]{2})*" if is_constructor else ""
    return re.compile(f"^0x{body}{tail}$")


def find_decoder_context(contexts: Mapping[str, DecoderContext], code_hex: str) -> DecoderContext | None:
    """Return the context whose binary matches `code_hex`, or None.

    Exact hash lookup first, then a pattern match that treats unlinked library
    placeholders as wildcards. Empty code never matches.
    """
    code = normalize_binary(code_hex)
    if code == "0x":
        return None
    exact = contexts.get(binary_hash(code))
    if exact is not None:
        return exact
    for context in contexts.values():
        if context.binary == "0x":
            continue
        if _binary_pattern(context.binary, context.is_constructor).match(code):
            return context
    return None


def find_context_by_id(contexts: Mapping[str, DecoderContext], contract_id: str) -> DecoderContext | None:
    """First context for `contract_id`; anonymous contexts are identified by hash."""
    for context in contexts.values():
        if (context.contract_id or context.context_hash) == contract_id:
            return context
    return None


def context_to_type(context: DecoderContext) -> ContractType:
    return ContractType(
        id=context.contract_id or context.context_hash,
        type_name=context.contract_name,
        contract_kind=context.contract_kind,
        payable=context.payable,
    )
