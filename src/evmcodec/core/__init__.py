"""Core models, configuration and collaborator interfaces.

This package provides:
- Execution info models (EvmState, DecoderContext, InternalFunctionEntry, EvmInfo)
- Configuration classes (DecoderOptions, DecodeCommandConfig)
- Byte source / code provider protocols
"""

from evmcodec.core.config import DecodeCommandConfig, DecoderOptions
from evmcodec.core.models import DecoderContext, EvmInfo, EvmState, InternalFunctionEntry

__all__ = [
    "DecodeCommandConfig",
    "DecoderOptions",
    "DecoderContext",
    "EvmInfo",
    "EvmState",
    "InternalFunctionEntry",
]
