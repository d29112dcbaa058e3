from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DecoderOptions:
    """Per-call decoding policy."""

    permissive_padding: bool = False  # skip zero/sign-extension padding checks
    strict_abi_mode: bool = False  # any failure stops the whole decode


@dataclass(frozen=True)
class DecodeCommandConfig:
    """Configuration for the `decode` CLI command."""

    type: str
    hex_data: str
    options: DecoderOptions = DecoderOptions()
    rpc_url: str | None = None
    contexts_path: Path | None = None
    timeout_s: int = 20
