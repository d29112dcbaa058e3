from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from evmcodec.core.models import EvmState


# ---------------------------------------------------------------------------
# IByteSource
# ---------------------------------------------------------------------------

@runtime_checkable
class IByteSource(Protocol):
    """
    Turns a data pointer into the raw bytes it references.

    Domain expectations:
    - Returns the full encoded word(s) for the pointer, padding included.
    - Raises `ReadError` when the pointer references unreadable data.
    """

    def read(self, pointer: Any, state: EvmState) -> bytes:
        """
        Return the bytes referenced by `pointer` in `state`.

        Implementations:
        - `evmcodec.decoding.read.ByteReader` (stack, memory, calldata, storage)
        - Trace replayers or synthetic sources for testing
        """
        ...


# ---------------------------------------------------------------------------
# ICodeProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class ICodeProvider(Protocol):
    """
    Source of deployed bytecode, used to identify contracts by address.

    Domain expectations:
    - An address with no code yields empty bytes, never an error.
    """

    async def get_code(self, address: str) -> bytes:
        """
        Return the bytecode deployed at `address`.

        Implementations:
        - RPC-based (`evmcodec.clients.rpc.RPC`)
        - In-memory mapping for testing
        """
        ...
