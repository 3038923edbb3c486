import unittest

from zkpnym import dlog_eq, session
from zkpnym.channel import channel_pair
from zkpnym.errors import ACCEPT, ProofError
from zkpnym.group import Point
from zkpnym.keys import OrgSecretKey, UserSecretKey
from zkpnym.protocol import Org, User, issuance_statements, verify_credential
from zkpnym.records import Nym


class ProtocolTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.usk = UserSecretKey.random()
        self.user = User(self.usk)
        self.osk = OrgSecretKey.random()
        self.org = Org(self.osk)


class TestNymGeneration(ProtocolTestCase):
    async def test_nym_generation(self) -> None:
        user_nym, org_nym = await session.establish_nym(self.user, self.org)
        self.assertEqual(user_nym, org_nym)
        self.assertEqual(self.usk.exponent * user_nym.a, user_nym.b)
        self.assertNotEqual(user_nym.a, Point.BASE)

    async def test_nyms_are_fresh_per_run(self) -> None:
        first, _ = await session.establish_nym(self.user, self.org)
        second, _ = await session.establish_nym(self.user, self.org)
        self.assertNotEqual(first.a, second.a)

    async def test_ca_nym_generation(self) -> None:
        user_nym, org_nym = await session.establish_nym(
            self.user, self.org, with_ca=True, for_key=self.usk.public_key
        )
        self.assertEqual(user_nym, org_nym)
        self.assertEqual(self.usk.exponent * user_nym.a, user_nym.b)

    async def test_ca_nym_requires_base_point(self) -> None:
        with self.assertRaises(ProofError) as ctx:
            await session.establish_nym(self.user, self.org, for_key=self.usk.public_key)
        self.assertEqual(ctx.exception.proof_name, "generate-nym")

    async def test_ca_nym_requires_registered_key(self) -> None:
        other = UserSecretKey.random()
        with self.assertRaises(ProofError):
            await session.establish_nym(self.user, self.org, with_ca=True, for_key=other.public_key)


class TestNymAuthentication(ProtocolTestCase):
    async def test_nym_authentication(self) -> None:
        nym, _ = await session.establish_nym(self.user, self.org)
        self.assertEqual(await session.authenticate(self.user, self.org, nym, nym), ACCEPT)

    async def test_forged_nym_is_rejected(self) -> None:
        nym, _ = await session.establish_nym(self.user, self.org)
        forged = Nym(Point.random(), Point.random())
        with self.assertRaises(ProofError):
            await session.authenticate(self.user, self.org, forged, nym)

    async def test_other_user_cannot_authenticate(self) -> None:
        nym, _ = await session.establish_nym(self.user, self.org)
        impostor = User(UserSecretKey.random())
        with self.assertRaises(ProofError):
            await session.authenticate(impostor, self.org, nym, nym)


class TestCredentials(ProtocolTestCase):
    async def asyncSetUp(self) -> None:
        self.nym, _ = await session.establish_nym(self.user, self.org)

    async def test_credential_issuing(self) -> None:
        cred = await session.issue(self.user, self.org, self.nym)
        y1, y2 = self.osk.exponents

        self.assertEqual(self.usk.exponent * cred.a, cred.b)
        self.assertEqual(y2 * cred.b, cred.A)
        self.assertEqual(y1 * (cred.a + cred.A), cred.B)
        self.assertNotEqual(cred.a, self.nym.a)

        first, second = issuance_statements(Nym(cred.a, cred.b), cred.A, cred.B, self.osk.public_key)
        self.assertEqual(dlog_eq.verify_transcript(cred.T1, first), ACCEPT)
        self.assertEqual(dlog_eq.verify_transcript(cred.T2, second), ACCEPT)
        self.assertEqual(verify_credential(cred, self.osk.public_key), ACCEPT)

    async def test_issuer_key_mismatch_aborts_issuance(self) -> None:
        wrong = OrgSecretKey.random().public_key
        user_end, org_end = channel_pair()
        with self.assertRaises(ProofError) as ctx:
            await session.run_exchange(
                self.user.issue_credential(user_end, self.nym, wrong),
                self.org.issue_credential(org_end, self.nym),
            )
        self.assertEqual(ctx.exception.proof_name, "blind-dlog-eq")

    async def test_credential_transfer(self) -> None:
        org2 = Org(OrgSecretKey.random())
        cred = await session.issue(self.user, self.org, self.nym)
        nym2, _ = await session.establish_nym(self.user, org2)

        result = await session.transfer(self.user, org2, nym2, cred, self.osk.public_key)
        self.assertEqual(result, ACCEPT)

        with self.assertRaises(ProofError):
            await session.transfer(
                self.user, org2, nym2, cred, OrgSecretKey.random().public_key
            )

    async def test_transfer_with_issuing_nym(self) -> None:
        org2 = Org(OrgSecretKey.random())
        cred = await session.issue(self.user, self.org, self.nym)
        result = await session.transfer(self.user, org2, self.nym, cred, self.osk.public_key)
        self.assertEqual(result, ACCEPT)

    async def test_stolen_credential_is_rejected(self) -> None:
        org2 = Org(OrgSecretKey.random())
        cred = await session.issue(self.user, self.org, self.nym)
        thief = User(UserSecretKey.random())
        thief_nym, _ = await session.establish_nym(thief, org2)
        with self.assertRaises(ProofError):
            await session.transfer(thief, org2, thief_nym, cred, self.osk.public_key)

    async def test_credentials_are_unlinkable(self) -> None:
        first = await session.issue(self.user, self.org, self.nym)
        second = await session.issue(self.user, self.org, self.nym)
        self.assertNotEqual(first.a, second.a)
        self.assertNotEqual(first.T1.a, second.T1.a)


if __name__ == "__main__":
    unittest.main()
