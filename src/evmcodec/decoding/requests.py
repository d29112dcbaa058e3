"""Suspension protocol between the decoder and its driver.

The decoder is a generator: it yields a request (`NeedsBytes` or `NeedsCode`),
the driver answers by sending the requested bytes back in, and the generator
finally returns its outcome. `DecodeSession` exposes this as explicit steps:

    session = DecodeSession(decode_value(data_type, pointer, info))
    step = session.start()
    while not isinstance(step, Done):
        step = session.resume(answer_for(step))
    outcome = step.outcome
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, Union

from evmcodec.decoding.errors import ReadErrorKind

if TYPE_CHECKING:
    from evmcodec.core.models import EvmState


@dataclass(frozen=True, slots=True)
class NeedsBytes:
    """Raw bytes at `pointer` in `state` are needed."""

    pointer: Any
    state: EvmState


@dataclass(frozen=True, slots=True)
class NeedsCode:
    """Bytecode deployed at `address` (checksummed) is needed."""

    address: str


@dataclass(frozen=True, slots=True)
class ReadFailure:
    """Answer to `NeedsBytes` when the pointer could not be dereferenced."""

    error: ReadErrorKind


Request = Union[NeedsBytes, NeedsCode]
Answer = Union[bytes, ReadFailure]

T = TypeVar("T")

# A suspendable computation yielding requests and returning T.
Decoding = Generator[Request, Answer, T]


@dataclass(frozen=True, slots=True)
class Done:
    """The computation finished with `outcome`."""

    outcome: Any


Step = Union[Done, NeedsBytes, NeedsCode]


class DecodeSession:
    """Step-by-step view of a suspendable decode."""

    def __init__(self, decoding: Decoding[Any]) -> None:
        self._decoding = decoding
        self._started = False
        self._finished = False

    def start(self) -> Step:
        if self._started:
            raise RuntimeError("Decode session already started")
        self._started = True
        return self._advance(None)

    def resume(self, answer: Answer) -> Step:
        if not self._started:
            raise RuntimeError("Decode session not started")
        if self._finished:
            raise RuntimeError("Decode session already finished")
        return self._advance(answer)

    def _advance(self, answer: Answer | None) -> Step:
        try:
            return self._decoding.send(answer)  # type: ignore[arg-type]
        except StopIteration as stop:
            self._finished = True
            return Done(stop.value)
