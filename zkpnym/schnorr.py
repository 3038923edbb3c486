"""Key seeds, expanded Schnorr keys and signatures."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass

from .constants import KEY_SEED_BYTES, NONCE_SEED_BYTES, SCALAR_BYTES, WIDE_SCALAR_BYTES
from .group import Point, Scalar


def random_key_seed() -> bytes:
    """Generate a fresh seed for a Schnorr secret key."""

    return secrets.token_bytes(KEY_SEED_BYTES)


def expand_key(seed: bytes) -> "SecretKey":
    """Expand a seed into a secret exponent and a nonce seed."""

    if len(seed) != KEY_SEED_BYTES:
        raise ValueError(f"Key seed must be {KEY_SEED_BYTES} bytes")
    exponent_material = hashlib.shake_256(b"zkpnym/key-exponent" + seed).digest(WIDE_SCALAR_BYTES)
    nonce = hashlib.sha512(b"zkpnym/key-nonce" + seed).digest()[:NONCE_SEED_BYTES]
    return SecretKey(Scalar.from_hash(exponent_material), nonce)


class SecretKey:
    """Secret exponent together with the seed used to synthesise nonces."""

    __slots__ = ("_exponent", "_nonce", "_public_key")

    def __init__(self, exponent: Scalar, nonce: bytes) -> None:
        if exponent == Scalar.ZERO:
            raise ValueError("Secret exponent must be non-zero")
        if len(nonce) != NONCE_SEED_BYTES:
            raise ValueError(f"Nonce seed must be {NONCE_SEED_BYTES} bytes")
        self._exponent = exponent
        self._nonce = bytes(nonce)
        self._public_key = PublicKey(exponent * Point.BASE)

    @property
    def exponent(self) -> Scalar:
        return self._exponent

    @property
    def nonce(self) -> bytes:
        return self._nonce

    @property
    def public_key(self) -> "PublicKey":
        return self._public_key

    def to_bytes(self) -> bytes:
        return self._exponent.to_bytes() + self._nonce

    @staticmethod
    def from_bytes(data: bytes) -> "SecretKey":
        if len(data) != SCALAR_BYTES + NONCE_SEED_BYTES:
            raise ValueError("Invalid secret key length")
        return SecretKey(Scalar.from_bytes(data[:SCALAR_BYTES]), data[SCALAR_BYTES:])

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)"


@dataclass(frozen=True)
class PublicKey:
    point: Point

    def to_bytes(self) -> bytes:
        return self.point.to_bytes()

    @staticmethod
    def from_bytes(data: bytes) -> "PublicKey":
        return PublicKey(Point.from_bytes(data))


@dataclass(frozen=True)
class Signature:
    """Schnorr signature ``(R, s)``."""

    R: Point
    s: Scalar

    def to_bytes(self) -> bytes:
        return self.R.to_bytes() + self.s.to_bytes()

    @staticmethod
    def from_bytes(data: bytes) -> "Signature":
        split = len(data) - SCALAR_BYTES
        if split <= 0:
            raise ValueError("Invalid signature length")
        return Signature(Point.from_bytes(data[:split]), Scalar.from_bytes(data[split:]))


__all__ = ["PublicKey", "SecretKey", "Signature", "expand_key", "random_key_seed"]
