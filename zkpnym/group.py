"""Point and scalar arithmetic over the prime-order subgroup of Z_p*.

The group is written additively so the protocol code reads like the usual
elliptic-curve notation: ``a + b`` is the group operation and ``x * g`` is
repeated application of it.
"""

from __future__ import annotations

import secrets

from .constants import G, P, POINT_BYTES, Q, SCALAR_BYTES, WIDE_SCALAR_BYTES


class Scalar:
    """Integer modulo the group order."""

    __slots__ = ("_value",)

    ZERO: "Scalar"
    ONE: "Scalar"

    def __init__(self, value: int) -> None:
        self._value = value % Q

    @property
    def value(self) -> int:
        return self._value

    @staticmethod
    def random() -> "Scalar":
        return Scalar(secrets.randbelow(Q))

    @staticmethod
    def from_hash(digest: bytes) -> "Scalar":
        """Reduce a wide hash output into a scalar."""

        if len(digest) < WIDE_SCALAR_BYTES:
            raise ValueError(f"Wide reduction needs at least {WIDE_SCALAR_BYTES} bytes of hash output")
        return Scalar(int.from_bytes(digest, "little"))

    @staticmethod
    def from_bytes(data: bytes) -> "Scalar":
        if len(data) != SCALAR_BYTES:
            raise ValueError(f"Scalar encoding must be {SCALAR_BYTES} bytes")
        value = int.from_bytes(data, "big")
        if value >= Q:
            raise ValueError("Non-canonical scalar encoding")
        return Scalar(value)

    def to_bytes(self) -> bytes:
        return self._value.to_bytes(SCALAR_BYTES, "big")

    def __add__(self, other: "Scalar") -> "Scalar":
        if not isinstance(other, Scalar):
            return NotImplemented
        return Scalar(self._value + other._value)

    def __sub__(self, other: "Scalar") -> "Scalar":
        if not isinstance(other, Scalar):
            return NotImplemented
        return Scalar(self._value - other._value)

    def __neg__(self) -> "Scalar":
        return Scalar(-self._value)

    def __mul__(self, other: "Scalar | Point") -> "Scalar | Point":
        if isinstance(other, Scalar):
            return Scalar(self._value * other._value)
        if isinstance(other, Point):
            return Point(pow(other.value, self._value, P))
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return secrets.compare_digest(self.to_bytes(), other.to_bytes())

    def __hash__(self) -> int:
        return hash(("Scalar", self._value))

    def __repr__(self) -> str:
        return f"Scalar({self.to_bytes()[-8:].hex()}...)"


class Point:
    """Element of the order-Q subgroup, written additively."""

    __slots__ = ("_value",)

    BASE: "Point"
    IDENTITY: "Point"

    def __init__(self, value: int) -> None:
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    @staticmethod
    def random() -> "Point":
        return Point(pow(G, secrets.randbelow(Q - 1) + 1, P))

    @staticmethod
    def from_bytes(data: bytes) -> "Point":
        if len(data) != POINT_BYTES:
            raise ValueError(f"Point encoding must be {POINT_BYTES} bytes")
        value = int.from_bytes(data, "big")
        if not 0 < value < P or pow(value, Q, P) != 1:
            raise ValueError("Encoding is not an element of the prime-order subgroup")
        return Point(value)

    def to_bytes(self) -> bytes:
        return self._value.to_bytes(POINT_BYTES, "big")

    def __add__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return Point((self._value * other._value) % P)

    def __neg__(self) -> "Point":
        return Point(pow(self._value, -1, P))

    def __sub__(self, other: "Point") -> "Point":
        if not isinstance(other, Point):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: "Scalar") -> "Point":
        if isinstance(other, Scalar):
            return Point(pow(self._value, other.value, P))
        return NotImplemented

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return secrets.compare_digest(self.to_bytes(), other.to_bytes())

    def __hash__(self) -> int:
        return hash(("Point", self._value))

    def __repr__(self) -> str:
        return f"Point({self.to_bytes()[-8:].hex()}...)"


Scalar.ZERO = Scalar(0)
Scalar.ONE = Scalar(1)
Point.BASE = Point(G)
Point.IDENTITY = Point(1)


__all__ = ["Point", "Scalar"]
