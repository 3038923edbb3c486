import unittest

from zkpnym import blind_dlog_eq, dlog_eq
from zkpnym.channel import channel_pair
from zkpnym.dlog_eq import Statement
from zkpnym.errors import ACCEPT, ProofError
from zkpnym.group import Point, Scalar
from zkpnym.session import run_exchange


def make_statement():
    x = Scalar.random()
    g1, g2 = Point.random(), Point.random()
    return Statement(g1=g1, h1=x * g1, g2=g2, h2=x * g2), x


class TestBlindDlogEq(unittest.IsolatedAsyncioTestCase):
    async def blind_run(self, statement, x, gamma):
        prover, verifier = channel_pair()
        _, transcript = await run_exchange(
            dlog_eq.prove(prover, statement, x),
            blind_dlog_eq.verify(verifier, statement, gamma),
        )
        return transcript

    async def test_transcript_verifies_for_blinded_statement(self) -> None:
        for _ in range(3):
            statement, x = make_statement()
            gamma = Scalar.random()
            transcript = await self.blind_run(statement, x, gamma)
            blinded = blind_dlog_eq.blinded_statement(statement, gamma)
            self.assertEqual(dlog_eq.verify_transcript(transcript, blinded), ACCEPT)

    async def test_transcript_does_not_verify_for_original_statement(self) -> None:
        statement, x = make_statement()
        transcript = await self.blind_run(statement, x, Scalar.random())
        with self.assertRaises(ProofError):
            dlog_eq.verify_transcript(transcript, statement)

    async def test_transcript_hides_run_values(self) -> None:
        statement, x = make_statement()
        prover, verifier = channel_pair()
        seen = []
        original_receive = verifier.receive

        async def recording_receive():
            record = await original_receive()
            seen.append(record)
            return record

        verifier.receive = recording_receive
        _, transcript = await run_exchange(
            dlog_eq.prove(prover, statement, x),
            blind_dlog_eq.verify(verifier, statement, Scalar.random()),
        )
        commitments, answer = seen
        self.assertNotEqual(transcript.a, commitments["a"])
        self.assertNotEqual(transcript.b, commitments["b"])
        self.assertNotEqual(transcript.y, answer["y"])

    async def test_dishonest_prover_is_rejected(self) -> None:
        statement, x = make_statement()
        prover, verifier = channel_pair()
        with self.assertRaises(ProofError) as ctx:
            await run_exchange(
                dlog_eq.prove(prover, statement, x + Scalar.ONE),
                blind_dlog_eq.verify(verifier, statement, Scalar.random()),
            )
        self.assertEqual(ctx.exception.proof_name, "blind-dlog-eq")


if __name__ == "__main__":
    unittest.main()
