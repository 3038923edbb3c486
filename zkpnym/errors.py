"""Failure types raised by the proof and credential protocols."""

ACCEPT = "ACCEPT"


class ProofError(Exception):
    """A zero-knowledge proof did not verify."""

    def __init__(self, proof_name: str) -> None:
        super().__init__(f"{proof_name} proof failure")
        self.proof_name = proof_name


class SignatureError(Exception):
    """A pseudonym-bound signature did not verify."""

    def __init__(self, message: str = "signature verification failed") -> None:
        super().__init__(message)


class ProtocolError(Exception):
    """The peer sent a message that does not fit the current protocol step."""


__all__ = ["ACCEPT", "ProofError", "ProtocolError", "SignatureError"]
