"""ABI function models and selector tables.

This package provides:
- pydantic models for ABI function entries (AbiParameter, AbiFunction)
- selector computation and selector -> AbiFunction tables
- loading of decoder contexts from JSON (see `evmcodec.abi.contexts`)
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from eth_utils import function_signature_to_4byte_selector

from evmcodec.abi.models import AbiFunction, AbiParameter


def get_canonical_type(param: AbiParameter) -> str:
    """Canonical ABI type of a parameter; tuples expand to their components."""
    if param.type.startswith("tuple"):
        inner = ",".join(get_canonical_type(c) for c in param.components or ())
        return f"({inner}){param.type[len('tuple'):]}"
    return param.type


def get_function_signature(function: AbiFunction) -> str:
    return f"{function.name}({','.join(get_canonical_type(p) for p in function.inputs)})"


def get_function_selector(function: AbiFunction) -> str:
    return "0x" + function_signature_to_4byte_selector(get_function_signature(function)).hex()


AbiJson = Iterable[dict[str, Any]]
AbiSpec = AbiJson | Path


def _load_abi(abi: AbiSpec) -> AbiJson:
    if isinstance(abi, Path):
        return json.loads(abi.read_text())
    return abi


def get_functions_from_abi(abi: AbiSpec) -> list[AbiFunction]:
    """Return the function entries of an ABI (events, errors, etc. are skipped)."""
    return [AbiFunction.model_validate(entry) for entry in _load_abi(abi) if entry.get("type") == "function"]


def make_abi_table(abi: AbiSpec) -> dict[str, AbiFunction]:
    """Map lowercased 0x-prefixed selectors to their function entries."""
    return {get_function_selector(function): function for function in get_functions_from_abi(abi)}


__all__ = [
    "AbiFunction",
    "AbiParameter",
    "get_canonical_type",
    "get_function_signature",
    "get_function_selector",
    "get_functions_from_abi",
    "make_abi_table",
]
