"""User and organization keys.

Users hold a single exponent and sign with it relative to a pseudonym.
Organizations hold two independent exponents, since credential issuance
needs two unrelated discrete logs, and can prove possession of both.
"""

from __future__ import annotations

import logging
from typing import Tuple

from . import dlog_eq
from .channel import Channel
from .constants import CHALLENGE_BYTES, NYM_SIGNATURE_PROTOCOL, WIDE_SCALAR_BYTES
from .dlog_eq import Statement
from .errors import ACCEPT, SignatureError
from .fiat_shamir import SigningContext
from .group import Point, Scalar
from .records import Nym
from .schnorr import PublicKey, SecretKey, Signature, expand_key, random_key_seed

logger = logging.getLogger(__name__)


def _bind_nym(context: SigningContext, nym: Nym) -> None:
    context.append_message("proto-name", NYM_SIGNATURE_PROTOCOL)
    context.append_message("sign:nym/a", nym.a.to_bytes())
    context.append_message("sign:nym/b", nym.b.to_bytes())


def nym_signature_challenge(nym: Nym, context: SigningContext, R: Point) -> Scalar:
    """Bind ``nym`` and the commitment ``R`` into ``context`` and derive the challenge."""

    _bind_nym(context, nym)
    context.append_message("sign:R", R.to_bytes())
    return Scalar.from_hash(context.challenge_bytes("sign:c", CHALLENGE_BYTES))


class UserSecretKey:
    __slots__ = ("_key",)

    def __init__(self, key: SecretKey) -> None:
        self._key = key

    @staticmethod
    def random() -> "UserSecretKey":
        return UserSecretKey(expand_key(random_key_seed()))

    @staticmethod
    def from_bytes(data: bytes) -> "UserSecretKey":
        return UserSecretKey(SecretKey.from_bytes(data))

    def to_bytes(self) -> bytes:
        return self._key.to_bytes()

    @property
    def public_key(self) -> "UserPublicKey":
        return UserPublicKey(self._key.public_key)

    @property
    def exponent(self) -> Scalar:
        return self._key.exponent

    def sign_with_nym(self, nym: Nym, context: SigningContext) -> Signature:
        """Schnorr-sign ``context`` using ``nym.a`` as the generator.

        The nonce is synthesised from the context and the key's nonce seed,
        so it is unique per signed context.
        """

        bound = context.clone()
        _bind_nym(bound, nym)
        r = Scalar.from_hash(
            bound.build_rng()
            .rekey_with_witness_bytes("signing", self._key.nonce)
            .finalize()
            .fill_bytes(WIDE_SCALAR_BYTES)
        )
        R = r * nym.a
        k = nym_signature_challenge(nym, context, R)
        return Signature(R, k * self._key.exponent + r)

    def __repr__(self) -> str:
        return "UserSecretKey(<redacted>)"


class UserPublicKey:
    __slots__ = ("_key",)

    def __init__(self, key: PublicKey) -> None:
        self._key = key

    @property
    def point(self) -> Point:
        return self._key.point

    def to_bytes(self) -> bytes:
        return self._key.to_bytes()

    @staticmethod
    def from_bytes(data: bytes) -> "UserPublicKey":
        return UserPublicKey(PublicKey.from_bytes(data))

    def verify_with_nym(self, nym: Nym, context: SigningContext, signature: Signature) -> str:
        """Check a signature made by :meth:`UserSecretKey.sign_with_nym`."""

        k = nym_signature_challenge(nym, context, signature.R)
        R = signature.s * nym.a - k * nym.b
        if R != signature.R:
            logger.warning("nym signature rejected")
            raise SignatureError()
        return ACCEPT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserPublicKey):
            return NotImplemented
        return self.point == other.point

    def __hash__(self) -> int:
        return hash(self.point)


class OrgSecretKey:
    __slots__ = ("_key1", "_key2")

    def __init__(self, key1: SecretKey, key2: SecretKey) -> None:
        self._key1 = key1
        self._key2 = key2

    @staticmethod
    def random() -> "OrgSecretKey":
        return OrgSecretKey(expand_key(random_key_seed()), expand_key(random_key_seed()))

    @staticmethod
    def from_bytes(data: bytes) -> "OrgSecretKey":
        half = len(data) // 2
        return OrgSecretKey(SecretKey.from_bytes(data[:half]), SecretKey.from_bytes(data[half:]))

    def to_bytes(self) -> bytes:
        return self._key1.to_bytes() + self._key2.to_bytes()

    @property
    def public_key(self) -> "OrgPublicKey":
        return OrgPublicKey(self._key1.public_key, self._key2.public_key)

    @property
    def exponents(self) -> Tuple[Scalar, Scalar]:
        return self._key1.exponent, self._key2.exponent

    async def prove_ownership(self, channel: Channel) -> None:
        for key in (self._key1, self._key2):
            await dlog_eq.prove(
                channel,
                Statement.possession(Point.BASE, key.public_key.point),
                key.exponent,
            )

    def __repr__(self) -> str:
        return "OrgSecretKey(<redacted>)"


class OrgPublicKey:
    __slots__ = ("_key1", "_key2")

    def __init__(self, key1: PublicKey, key2: PublicKey) -> None:
        self._key1 = key1
        self._key2 = key2

    @property
    def points(self) -> Tuple[Point, Point]:
        return self._key1.point, self._key2.point

    def to_bytes(self) -> bytes:
        return self._key1.to_bytes() + self._key2.to_bytes()

    @staticmethod
    def from_bytes(data: bytes) -> "OrgPublicKey":
        half = len(data) // 2
        return OrgPublicKey(PublicKey.from_bytes(data[:half]), PublicKey.from_bytes(data[half:]))

    async def verify_ownership(self, channel: Channel) -> str:
        for key in (self._key1, self._key2):
            await dlog_eq.verify(channel, Statement.possession(Point.BASE, key.point))
        return ACCEPT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrgPublicKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


__all__ = [
    "OrgPublicKey",
    "OrgSecretKey",
    "UserPublicKey",
    "UserSecretKey",
    "nym_signature_challenge",
]
