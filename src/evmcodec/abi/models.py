from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class AbiParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: str
    internalType: str | None = None
    components: tuple[AbiParameter, ...] | None = None


class AbiFunction(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["function"] = "function"
    inputs: tuple[AbiParameter, ...] = ()
    outputs: tuple[AbiParameter, ...] = ()
    stateMutability: str = "nonpayable"
