"""Load decoder contexts from JSON.

Expected layout: a list of objects such as

    {
      "contractName": "Token",
      "binary": "0x6080...",
      "contractKind": "contract",
      "isConstructor": false,
      "abi": [ ... standard ABI entries ... ]
    }
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from evmcodec.abi import make_abi_table
from evmcodec.core.models import DecoderContext
from evmcodec.decoding.contexts import make_context


class ContextSpec(BaseModel):
    binary: str
    contractName: str | None = None
    contractId: str | None = None
    contractKind: str | None = "contract"
    payable: bool | None = None
    isConstructor: bool = False
    abi: list[dict[str, Any]] | None = None


def context_from_spec(spec: ContextSpec) -> DecoderContext:
    return make_context(
        spec.binary,
        contract_id=spec.contractId,
        contract_name=spec.contractName,
        contract_kind=spec.contractKind,
        payable=spec.payable,
        is_constructor=spec.isConstructor,
        abi=make_abi_table(spec.abi) if spec.abi is not None else None,
    )


def load_contexts(source: Path | Iterable[dict[str, Any]]) -> dict[str, DecoderContext]:
    """Build the known-contexts registry (context hash -> context)."""
    entries = json.loads(source.read_text()) if isinstance(source, Path) else source
    contexts: dict[str, DecoderContext] = {}
    for entry in entries:
        context = context_from_spec(ContextSpec.model_validate(entry))
        contexts[context.context_hash] = context
    return contexts
