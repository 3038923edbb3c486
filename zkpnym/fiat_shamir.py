"""Domain-separated hash transcripts for Fiat-Shamir challenges and nonces."""

from __future__ import annotations

import hashlib
import secrets
from typing import Protocol, Union

from .constants import SIGNING_CONTEXT_LABEL

Data = Union[bytes, str]


class XofState(Protocol):
    """Extendable-output hash state, as returned by ``hashlib.shake_256``."""

    def update(self, data: bytes, /) -> None: ...

    def copy(self) -> "XofState": ...

    def digest(self, length: int, /) -> bytes: ...


def _as_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _frame(tag: bytes, label: Data, data: bytes) -> bytes:
    label_bytes = _as_bytes(label)
    return (
        tag
        + len(label_bytes).to_bytes(4, "little")
        + label_bytes
        + len(data).to_bytes(4, "little")
        + data
    )


class HashTranscript:
    """Append-only transcript; every output depends on all prior appends."""

    def __init__(self, label: Data) -> None:
        self._state: XofState = hashlib.shake_256()
        self.append_message("dom-sep", label)

    def append_message(self, label: Data, message: Data) -> None:
        self._state.update(_frame(b"M", label, _as_bytes(message)))

    def challenge_bytes(self, label: Data, length: int) -> bytes:
        self._state.update(_frame(b"C", label, length.to_bytes(4, "little")))
        output = self._state.copy().digest(length)
        # Bind the output so a second challenge never repeats the first.
        self._state.update(_frame(b"O", label, output))
        return output

    def clone(self) -> "HashTranscript":
        copy = object.__new__(type(self))
        copy.__dict__.update(self.__dict__)
        copy._state = self._state.copy()
        return copy

    def build_rng(self) -> "TranscriptRngBuilder":
        return TranscriptRngBuilder(self._state.copy())


class TranscriptRngBuilder:
    """Collects secret witness material before fixing the nonce generator."""

    def __init__(self, state: XofState) -> None:
        self._state = state

    def rekey_with_witness_bytes(self, label: Data, witness: bytes) -> "TranscriptRngBuilder":
        self._state.update(_frame(b"W", label, witness))
        return self

    def finalize(self, entropy: bytes | None = None) -> "TranscriptRng":
        if entropy is None:
            entropy = secrets.token_bytes(32)
        self._state.update(_frame(b"R", "rng", entropy))
        return TranscriptRng(self._state)


class TranscriptRng:
    """Deterministic byte stream keyed by transcript, witness and entropy."""

    def __init__(self, state: XofState) -> None:
        self._state = state
        self._counter = 0

    def fill_bytes(self, length: int) -> bytes:
        block = self._state.copy()
        block.update(_frame(b"F", "fill", self._counter.to_bytes(8, "little")))
        self._counter += 1
        return block.digest(length)


class SigningContext(HashTranscript):
    """Transcript seeded with an application signing context."""

    def __init__(self, context: Data) -> None:
        super().__init__(SIGNING_CONTEXT_LABEL)
        self.append_message("", context)


__all__ = [
    "HashTranscript",
    "SigningContext",
    "TranscriptRng",
    "TranscriptRngBuilder",
]
