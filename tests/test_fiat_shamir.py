import unittest

from zkpnym.fiat_shamir import HashTranscript, SigningContext


class TestHashTranscript(unittest.TestCase):
    def test_challenges_depend_on_every_append(self) -> None:
        first = HashTranscript("test")
        first.append_message("m", b"one")
        second = HashTranscript("test")
        second.append_message("m", b"two")
        self.assertNotEqual(first.challenge_bytes("c", 32), second.challenge_bytes("c", 32))

    def test_domain_label_separates_transcripts(self) -> None:
        first = HashTranscript("protocol-a")
        second = HashTranscript("protocol-b")
        self.assertNotEqual(first.challenge_bytes("c", 32), second.challenge_bytes("c", 32))

    def test_labels_are_framed(self) -> None:
        first = HashTranscript("test")
        first.append_message("ab", b"c")
        second = HashTranscript("test")
        second.append_message("a", b"bc")
        self.assertNotEqual(first.challenge_bytes("c", 32), second.challenge_bytes("c", 32))

    def test_clone_replays_deterministically(self) -> None:
        transcript = SigningContext("ctx")
        transcript.append_message("msg", "hello")
        clone = transcript.clone()
        self.assertIsInstance(clone, SigningContext)
        self.assertEqual(transcript.challenge_bytes("c", 64), clone.challenge_bytes("c", 64))
        self.assertNotEqual(transcript.challenge_bytes("c", 64), transcript.clone().challenge_bytes("d", 64))

    def test_successive_challenges_differ(self) -> None:
        transcript = HashTranscript("test")
        self.assertNotEqual(transcript.challenge_bytes("c", 32), transcript.challenge_bytes("c", 32))

    def test_rng_mixes_witness(self) -> None:
        transcript = HashTranscript("test")
        entropy = b"\x07" * 32
        one = transcript.build_rng().rekey_with_witness_bytes("w", b"secret-1").finalize(entropy)
        two = transcript.build_rng().rekey_with_witness_bytes("w", b"secret-2").finalize(entropy)
        same = transcript.build_rng().rekey_with_witness_bytes("w", b"secret-1").finalize(entropy)
        self.assertNotEqual(one.fill_bytes(64), two.fill_bytes(64))
        self.assertEqual(
            transcript.build_rng().rekey_with_witness_bytes("w", b"secret-1").finalize(entropy).fill_bytes(64),
            same.fill_bytes(64),
        )

    def test_rng_does_not_touch_transcript(self) -> None:
        transcript = HashTranscript("test")
        reference = transcript.clone()
        transcript.build_rng().rekey_with_witness_bytes("w", b"secret").finalize().fill_bytes(32)
        self.assertEqual(transcript.challenge_bytes("c", 32), reference.challenge_bytes("c", 32))


if __name__ == "__main__":
    unittest.main()
