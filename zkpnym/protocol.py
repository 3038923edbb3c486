"""Pseudonym and credential protocols between a user and organizations.

Each method runs one party's side of a two-party exchange; the peer runs the
method of the same name on the other channel end.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from . import blind_dlog_eq, dlog_eq
from .channel import (
    Channel,
    IssuedPoints,
    NymBase,
    NymPoint,
    NymResponse,
    receive_message,
    send_message,
)
from .dlog_eq import Statement
from .errors import ProofError
from .group import Point, Scalar
from .keys import OrgPublicKey, OrgSecretKey, UserPublicKey, UserSecretKey
from .records import Cred, Nym

logger = logging.getLogger(__name__)

GENERATE_NYM = "generate-nym"


def issuance_statements(
    nym: Nym, A: Point, B: Point, issuer: OrgPublicKey
) -> Tuple[Statement, Statement]:
    """The two statements an issuer proves, in the order it proves them."""

    Y1, Y2 = issuer.points
    first = Statement(g1=Point.BASE, h1=Y2, g2=nym.b, h2=A)
    second = Statement(g1=Point.BASE, h1=Y1, g2=nym.a + A, h2=B)
    return first, second


def verify_credential(cred: Cred, source_key: OrgPublicKey) -> str:
    """Check both issuance transcripts of ``cred`` against its issuer's key."""

    first, second = issuance_statements(Nym(cred.a, cred.b), cred.A, cred.B, source_key)
    dlog_eq.verify_transcript(cred.T1, first)
    return dlog_eq.verify_transcript(cred.T2, second)


class User:
    __slots__ = ("_sk",)

    def __init__(self, sk: UserSecretKey) -> None:
        self._sk = sk

    @property
    def public_key(self) -> UserPublicKey:
        return self._sk.public_key

    async def generate_nym(self, channel: Channel, *, with_ca: bool = False) -> Nym:
        """Establish a pseudonym with an organization.

        With ``with_ca`` the pseudonym is rooted at the base point, so the
        organization can tie it to the user's registered public key.
        """

        x = self._sk.exponent
        a_ = Point.BASE if with_ca else Point.random()
        b_ = x * a_
        await send_message(channel, NymBase(a_=a_, b_=b_))

        a = (await receive_message(channel, NymPoint)).a
        b = x * a
        await send_message(channel, NymResponse(b=b))

        await dlog_eq.prove(channel, Statement(g1=a, h1=b, g2=a_, h2=b_), x)
        logger.debug("pseudonym established (ca=%s)", with_ca)
        return Nym(a, b)

    async def authenticate_nym(self, channel: Channel, nym: Nym) -> None:
        await dlog_eq.prove(channel, Statement.possession(nym.a, nym.b), self._sk.exponent)

    async def issue_credential(self, channel: Channel, nym: Nym, source_key: OrgPublicKey) -> Cred:
        """Receive a credential on ``nym`` and blind it with a fresh factor."""

        issued = await receive_message(channel, IssuedPoints)
        A, B = issued.A, issued.B
        first, second = issuance_statements(nym, A, B, source_key)

        gamma = Scalar.random()
        T1 = await blind_dlog_eq.verify(channel, first, gamma)
        T2 = await blind_dlog_eq.verify(channel, second, gamma)

        logger.debug("credential received")
        return Cred(
            a=gamma * nym.a,
            b=gamma * nym.b,
            A=gamma * A,
            B=gamma * B,
            T1=T1,
            T2=T2,
        )

    async def transfer_credential(self, channel: Channel, nym: Nym, cred: Cred) -> None:
        """Show that ``cred`` belongs to the holder of the live ``nym``."""

        await dlog_eq.prove(
            channel,
            Statement(g1=nym.a, h1=nym.b, g2=cred.a, h2=cred.b),
            self._sk.exponent,
        )


class Org:
    __slots__ = ("_sk",)

    def __init__(self, sk: OrgSecretKey) -> None:
        self._sk = sk

    @property
    def public_key(self) -> OrgPublicKey:
        return self._sk.public_key

    async def generate_nym(self, channel: Channel, *, for_key: Optional[UserPublicKey] = None) -> Nym:
        """Establish a pseudonym with a user.

        With ``for_key`` the user must root the pseudonym at the base point
        and at that registered public key.
        """

        base = await receive_message(channel, NymBase)
        a_, b_ = base.a_, base.b_
        if for_key is not None:
            ok_base = int(a_ == Point.BASE)
            ok_key = int(b_ == for_key.point)
            if (ok_base & ok_key) == 0:
                logger.warning("pseudonym request does not match the registered key")
                raise ProofError(GENERATE_NYM)

        r = Scalar.random()
        a = r * a_
        await send_message(channel, NymPoint(a=a))
        b = (await receive_message(channel, NymResponse)).b

        await dlog_eq.verify(channel, Statement(g1=a, h1=b, g2=a_, h2=b_))
        logger.info("pseudonym established")
        return Nym(a, b)

    async def authenticate_nym(self, channel: Channel, nym: Nym) -> str:
        return await dlog_eq.verify(channel, Statement.possession(nym.a, nym.b))

    async def issue_credential(self, channel: Channel, nym: Nym) -> None:
        y1, y2 = self._sk.exponents
        A = y2 * nym.b
        B = y1 * (nym.a + A)
        await send_message(channel, IssuedPoints(A=A, B=B))

        first, second = issuance_statements(nym, A, B, self.public_key)
        await dlog_eq.prove(channel, first, y2)
        await dlog_eq.prove(channel, second, y1)
        logger.info("credential issued")

    async def transfer_credential(
        self,
        channel: Channel,
        nym: Nym,
        cred: Cred,
        source_key: OrgPublicKey,
    ) -> str:
        """Accept ``cred`` issued under ``source_key`` for the holder of ``nym``."""

        verify_credential(cred, source_key)
        result = await dlog_eq.verify(
            channel, Statement(g1=nym.a, h1=nym.b, g2=cred.a, h2=cred.b)
        )
        logger.info("credential transfer accepted")
        return result


__all__ = ["GENERATE_NYM", "Org", "User", "issuance_statements", "verify_credential"]
