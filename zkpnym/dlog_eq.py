"""Chaum-Pedersen proof that two point pairs share a discrete logarithm.

The statement is ``(g1, h1, g2, h2)``; the prover knows ``x`` with
``h1 = x * g1`` and ``h2 = x * g2``.  The proof runs interactively over a
channel, or non-interactively as a stored :class:`Transcript` whose
challenge is derived with Fiat-Shamir.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .channel import Answer, Challenge, Channel, Commitments, receive_message, send_message
from .constants import CHALLENGE_BYTES, DLOG_EQ_CHALLENGE_LABEL
from .errors import ACCEPT, ProofError
from .fiat_shamir import HashTranscript
from .group import Point, Scalar
from .records import Transcript

logger = logging.getLogger(__name__)

PROOF_NAME = "dlog-eq"


@dataclass(frozen=True)
class Statement:
    """Public values of a discrete-log equality claim."""

    g1: Point
    h1: Point
    g2: Point
    h2: Point

    @staticmethod
    def possession(g: Point, h: Point) -> "Statement":
        """Degenerate statement proving knowledge of ``log_g(h)``."""

        return Statement(g1=g, h1=h, g2=g, h2=h)


def non_interactive_challenge(statement: Statement, a: Point, b: Point) -> Scalar:
    """Fiat-Shamir challenge for commitments ``(a, b)`` on ``statement``."""

    transcript = HashTranscript(DLOG_EQ_CHALLENGE_LABEL)
    transcript.append_message("g1", statement.g1.to_bytes())
    transcript.append_message("h1", statement.h1.to_bytes())
    transcript.append_message("g2", statement.g2.to_bytes())
    transcript.append_message("h2", statement.h2.to_bytes())
    transcript.append_message("a", a.to_bytes())
    transcript.append_message("b", b.to_bytes())
    return Scalar.from_hash(transcript.challenge_bytes("c", CHALLENGE_BYTES))


def _equations_hold(statement: Statement, a: Point, b: Point, c: Scalar, y: Scalar) -> int:
    # Both sides are always evaluated; the caller combines them bitwise.
    ok1 = int(y * statement.g1 == a + c * statement.h1)
    ok2 = int(y * statement.g2 == b + c * statement.h2)
    return ok1 & ok2


def check(
    statement: Statement,
    a: Point,
    b: Point,
    c: Scalar,
    y: Scalar,
    *,
    challenge_ok: int = 1,
    proof_name: str = PROOF_NAME,
) -> str:
    """Apply the verification equations for a challenge from any source."""

    if (challenge_ok & _equations_hold(statement, a, b, c, y)) == 0:
        logger.warning("%s verification failed", proof_name)
        raise ProofError(proof_name)
    return ACCEPT


async def prove(channel: Channel, statement: Statement, x: Scalar) -> None:
    """Run the prover side of the interactive proof."""

    r = Scalar.random()
    await send_message(channel, Commitments(a=r * statement.g1, b=r * statement.g2))
    challenge = await receive_message(channel, Challenge)
    await send_message(channel, Answer(y=r + x * challenge.c))


async def verify(channel: Channel, statement: Statement) -> str:
    """Run the verifier side of the interactive proof with a random challenge."""

    commitments = await receive_message(channel, Commitments)
    c = Scalar.random()
    await send_message(channel, Challenge(c=c))
    answer = await receive_message(channel, Answer)
    result = check(statement, commitments.a, commitments.b, c, answer.y)
    logger.debug("%s interactive proof accepted", PROOF_NAME)
    return result


def prove_non_interactive(statement: Statement, x: Scalar) -> Transcript:
    """Produce a self-contained proof transcript."""

    r = Scalar.random()
    a = r * statement.g1
    b = r * statement.g2
    c = non_interactive_challenge(statement, a, b)
    return Transcript(a=a, b=b, c=c, y=r + x * c)


def verify_transcript(transcript: Transcript, statement: Statement) -> str:
    """Verify a stored transcript without any interaction."""

    expected = non_interactive_challenge(statement, transcript.a, transcript.b)
    challenge_ok = int(transcript.c == expected)
    return check(
        statement,
        transcript.a,
        transcript.b,
        transcript.c,
        transcript.y,
        challenge_ok=challenge_ok,
    )


__all__ = [
    "PROOF_NAME",
    "Statement",
    "Transcript",
    "check",
    "non_interactive_challenge",
    "prove",
    "prove_non_interactive",
    "verify",
    "verify_transcript",
]
