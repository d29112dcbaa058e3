"""Lightweight JSON-RPC client for Ethereum-compatible nodes.

This module provides:
- `RPC`: an async client with sane timeouts/connection limits
- `get_code`: deployed bytecode lookup, usable as the decoder's code provider
"""

from __future__ import annotations

import httpx
from eth_utils import decode_hex


def to_hex_block(x: int | str) -> str:
    """Return a 0x-prefixed hex block number, or a block tag unchanged."""
    return hex(x) if isinstance(x, int) else x


class RPC:
    """Minimal async RPC client.

    Parameters
    ----------
    url : str
        RPC endpoint URL.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    block : int | str
        Block at which code is fetched ("latest" by default).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: int = 20,
        max_connections: int = 64,
        block: int | str = "latest",
    ) -> None:
        self.url = url
        self.block = block
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=True,
        )

    async def _call(self, method: str, params: list) -> object:
        r = await self.client.post(
            self.url,
            json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params},
        )
        r.raise_for_status()
        data = r.json()
        if "error" in data:
            e = data["error"]
            raise RuntimeError(f"RPC error: {e.get('code')} {e.get('message')}")
        return data.get("result")

    async def get_code(self, address: str) -> bytes:
        """Return the bytecode deployed at `address` (empty for EOAs)."""
        result = await self._call("eth_getCode", [address.lower(), to_hex_block(self.block)])
        return decode_hex(str(result or "0x"))

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
