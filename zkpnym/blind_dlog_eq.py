"""Verifier-side blinding of a discrete-log equality proof.

The verifier joins an ordinary interactive run, but shifts the commitments by
fresh ``alpha``/``beta`` and scales the second pair by its secret ``gamma``.
Checking the honest prover's answer against the original statement also
yields a Fiat-Shamir transcript that verifies for
``(g1, h1, gamma * g2, gamma * h2)`` and cannot be linked to the run.
"""

from __future__ import annotations

import logging

from . import dlog_eq
from .channel import Answer, Challenge, Channel, Commitments, receive_message, send_message
from .dlog_eq import Statement
from .group import Scalar
from .records import Transcript

logger = logging.getLogger(__name__)

PROOF_NAME = "blind-dlog-eq"


def blinded_statement(statement: Statement, gamma: Scalar) -> Statement:
    """The statement a blinded transcript verifies against."""

    return Statement(
        g1=statement.g1,
        h1=statement.h1,
        g2=gamma * statement.g2,
        h2=gamma * statement.h2,
    )


async def verify(channel: Channel, statement: Statement, gamma: Scalar) -> Transcript:
    """Verify an interactive proof and return its blinded transcript."""

    commitments = await receive_message(channel, Commitments)
    a, b = commitments.a, commitments.b

    alpha = Scalar.random()
    beta = Scalar.random()

    a1 = a + alpha * statement.g1 + beta * statement.h1
    b1 = gamma * (b + alpha * statement.g2 + beta * statement.h2)
    c_blind = dlog_eq.non_interactive_challenge(blinded_statement(statement, gamma), a1, b1)

    c = c_blind + beta
    await send_message(channel, Challenge(c=c))
    answer = await receive_message(channel, Answer)

    # The answer is checked against the unblinded statement and the
    # commitments exactly as received.
    dlog_eq.check(statement, a, b, c, answer.y, proof_name=PROOF_NAME)
    logger.debug("%s proof accepted", PROOF_NAME)

    return Transcript(a=a1, b=b1, c=c_blind, y=answer.y + alpha)


__all__ = ["PROOF_NAME", "blinded_statement", "verify"]
