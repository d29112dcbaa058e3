"""Drivers that answer decoder requests, and composite decoding.

- `run_decoder`: synchronous; bytes from an `IByteSource`, code from a callable
- `arun_decoder`: asyncio; code from an `ICodeProvider` (e.g. the RPC client)
- `decode_members`: decode several slots; errors stay local, a strict-mode
  stop ends the whole composite
- `decode` / `adecode`: one-call helpers around `decode_value`
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from evmcodec.core.config import DecoderOptions
from evmcodec.core.interfaces import IByteSource, ICodeProvider
from evmcodec.core.models import EvmInfo
from evmcodec.decoding.decoder import Outcome, decode_value
from evmcodec.decoding.errors import ReadError, StopDecoding
from evmcodec.decoding.read import ByteReader
from evmcodec.decoding.requests import Answer, DecodeSession, Decoding, Done, NeedsBytes, ReadFailure
from evmcodec.decoding.types import Type
from evmcodec.decoding.values import Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

CodeLookup = Callable[[str], "bytes | None"]


def _read_answer(request: NeedsBytes, reader: IByteSource) -> Answer:
    try:
        return reader.read(request.pointer, request.state)
    except ReadError as e:
        logger.debug("read failed at %r: %s", request.pointer, e.error.message)
        return ReadFailure(e.error)


def run_decoder(
    decoding: Decoding[T],
    *,
    reader: IByteSource | None = None,
    get_code: CodeLookup | None = None,
) -> T:
    """Drive a suspendable decode to completion synchronously.

    Addresses `get_code` knows nothing about (or all addresses, when it is
    omitted) have empty code.
    """
    byte_source = reader or ByteReader()
    session = DecodeSession(decoding)
    step = session.start()
    while not isinstance(step, Done):
        if isinstance(step, NeedsBytes):
            answer = _read_answer(step, byte_source)
        else:
            answer = (get_code(step.address) if get_code else None) or b""
        step = session.resume(answer)
    return step.outcome


async def arun_decoder(
    decoding: Decoding[T],
    *,
    reader: IByteSource | None = None,
    code_provider: ICodeProvider | None = None,
) -> T:
    """Drive a suspendable decode to completion, awaiting code requests."""
    byte_source = reader or ByteReader()
    session = DecodeSession(decoding)
    step = session.start()
    while not isinstance(step, Done):
        if isinstance(step, NeedsBytes):
            answer = _read_answer(step, byte_source)
        else:
            code = await code_provider.get_code(step.address) if code_provider else None
            answer = code or b""
        step = session.resume(answer)
    return step.outcome


def decode_members(
    members: Iterable[tuple[str, Type, Any]],
    info: EvmInfo,
    options: DecoderOptions = DecoderOptions(),
) -> Decoding[list[tuple[str, Result]] | StopDecoding]:
    """Decode (name, type, pointer) members in order.

    A member's `ErrorResult` does not affect its siblings; a `StopDecoding`
    outcome is returned as soon as it happens.
    """
    decoded: list[tuple[str, Result]] = []
    for name, data_type, pointer in members:
        outcome = yield from decode_value(data_type, pointer, info, options)
        if isinstance(outcome, StopDecoding):
            logger.debug("decoding stopped at member %s: %s", name, outcome.error.message)
            return outcome
        decoded.append((name, outcome))
    return decoded


def decode(
    data_type: Type,
    pointer: Any,
    info: EvmInfo,
    options: DecoderOptions = DecoderOptions(),
    *,
    reader: IByteSource | None = None,
    get_code: CodeLookup | None = None,
) -> Outcome:
    return run_decoder(decode_value(data_type, pointer, info, options), reader=reader, get_code=get_code)


async def adecode(
    data_type: Type,
    pointer: Any,
    info: EvmInfo,
    options: DecoderOptions = DecoderOptions(),
    *,
    reader: IByteSource | None = None,
    code_provider: ICodeProvider | None = None,
) -> Outcome:
    return await arun_decoder(
        decode_value(data_type, pointer, info, options), reader=reader, code_provider=code_provider
    )
