"""Immutable protocol artifacts: proof transcripts, pseudonyms, credentials."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict

from .constants import POINT_BYTES, SCALAR_BYTES
from .group import Point, Scalar


def _read(data: bytes, offset: int, width: int) -> bytes:
    chunk = data[offset : offset + width]
    if len(chunk) != width:
        raise ValueError("Truncated encoding")
    return chunk


@dataclass(frozen=True)
class Transcript:
    """Non-interactive discrete-log equality proof ``(a, b, c, y)``."""

    a: Point
    b: Point
    c: Scalar
    y: Scalar

    SIZE = 2 * POINT_BYTES + 2 * SCALAR_BYTES

    def to_bytes(self) -> bytes:
        return self.a.to_bytes() + self.b.to_bytes() + self.c.to_bytes() + self.y.to_bytes()

    @staticmethod
    def from_bytes(data: bytes) -> "Transcript":
        if len(data) != Transcript.SIZE:
            raise ValueError("Invalid transcript length")
        return Transcript(
            a=Point.from_bytes(_read(data, 0, POINT_BYTES)),
            b=Point.from_bytes(_read(data, POINT_BYTES, POINT_BYTES)),
            c=Scalar.from_bytes(_read(data, 2 * POINT_BYTES, SCALAR_BYTES)),
            y=Scalar.from_bytes(_read(data, 2 * POINT_BYTES + SCALAR_BYTES, SCALAR_BYTES)),
        )

    def to_dict(self) -> Dict[str, str]:
        return {field.name: getattr(self, field.name).to_bytes().hex() for field in fields(self)}

    @staticmethod
    def from_dict(data: Dict[str, str]) -> "Transcript":
        return Transcript(
            a=Point.from_bytes(bytes.fromhex(data["a"])),
            b=Point.from_bytes(bytes.fromhex(data["b"])),
            c=Scalar.from_bytes(bytes.fromhex(data["c"])),
            y=Scalar.from_bytes(bytes.fromhex(data["y"])),
        )


@dataclass(frozen=True)
class Nym:
    """Pseudonym ``(a, b)`` with ``b = x * a`` for the owner's secret ``x``."""

    a: Point
    b: Point

    SIZE = 2 * POINT_BYTES

    def to_bytes(self) -> bytes:
        return self.a.to_bytes() + self.b.to_bytes()

    @staticmethod
    def from_bytes(data: bytes) -> "Nym":
        if len(data) != Nym.SIZE:
            raise ValueError("Invalid pseudonym length")
        return Nym(
            a=Point.from_bytes(_read(data, 0, POINT_BYTES)),
            b=Point.from_bytes(_read(data, POINT_BYTES, POINT_BYTES)),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"a": self.a.to_bytes().hex(), "b": self.b.to_bytes().hex()}

    @staticmethod
    def from_dict(data: Dict[str, str]) -> "Nym":
        return Nym(
            a=Point.from_bytes(bytes.fromhex(data["a"])),
            b=Point.from_bytes(bytes.fromhex(data["b"])),
        )


@dataclass(frozen=True)
class Cred:
    """Blinded, transferable credential issued on a pseudonym.

    ``a``/``b`` are the pseudonym scaled by the holder's blinding factor,
    ``A``/``B`` carry the issuer's two secret exponents and ``T1``/``T2``
    prove them against the issuer's public key.
    """

    a: Point
    b: Point
    A: Point
    B: Point
    T1: Transcript
    T2: Transcript

    SIZE = 4 * POINT_BYTES + 2 * Transcript.SIZE

    def to_bytes(self) -> bytes:
        return b"".join(
            [
                self.a.to_bytes(),
                self.b.to_bytes(),
                self.A.to_bytes(),
                self.B.to_bytes(),
                self.T1.to_bytes(),
                self.T2.to_bytes(),
            ]
        )

    @staticmethod
    def from_bytes(data: bytes) -> "Cred":
        if len(data) != Cred.SIZE:
            raise ValueError("Invalid credential length")
        points = [Point.from_bytes(_read(data, i * POINT_BYTES, POINT_BYTES)) for i in range(4)]
        offset = 4 * POINT_BYTES
        t1 = Transcript.from_bytes(_read(data, offset, Transcript.SIZE))
        t2 = Transcript.from_bytes(_read(data, offset + Transcript.SIZE, Transcript.SIZE))
        return Cred(a=points[0], b=points[1], A=points[2], B=points[3], T1=t1, T2=t2)

    def to_dict(self) -> Dict[str, object]:
        return {
            "a": self.a.to_bytes().hex(),
            "b": self.b.to_bytes().hex(),
            "A": self.A.to_bytes().hex(),
            "B": self.B.to_bytes().hex(),
            "T1": self.T1.to_dict(),
            "T2": self.T2.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, object]) -> "Cred":
        return Cred(
            a=Point.from_bytes(bytes.fromhex(data["a"])),  # type: ignore[arg-type]
            b=Point.from_bytes(bytes.fromhex(data["b"])),  # type: ignore[arg-type]
            A=Point.from_bytes(bytes.fromhex(data["A"])),  # type: ignore[arg-type]
            B=Point.from_bytes(bytes.fromhex(data["B"])),  # type: ignore[arg-type]
            T1=Transcript.from_dict(data["T1"]),  # type: ignore[arg-type]
            T2=Transcript.from_dict(data["T2"]),  # type: ignore[arg-type]
        )


__all__ = ["Cred", "Nym", "Transcript"]
