"""
evmcodec - EVM value decoder

Decodes raw ABI-encoded words read from an EVM execution state (stack,
memory, storage, calldata) into typed values.

Core modules:
- decoding: type descriptors, decoded values, error results and the decoder
- core: execution info models, options and collaborator interfaces
- abi: ABI function tables and context loading
- clients: JSON-RPC bytecode source
"""

__version__ = "0.1.0"
