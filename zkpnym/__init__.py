"""Anonymous pseudonyms and transferable credentials from discrete-log proofs."""

from .channel import Channel, MemoryChannel, channel_pair
from .dlog_eq import Statement
from .errors import ACCEPT, ProofError, ProtocolError, SignatureError
from .fiat_shamir import HashTranscript, SigningContext
from .group import Point, Scalar
from .keys import OrgPublicKey, OrgSecretKey, UserPublicKey, UserSecretKey
from .protocol import Org, User, verify_credential
from .records import Cred, Nym, Transcript
from .schnorr import Signature

__all__ = [
    "ACCEPT",
    "Channel",
    "Cred",
    "HashTranscript",
    "MemoryChannel",
    "Nym",
    "Org",
    "OrgPublicKey",
    "OrgSecretKey",
    "Point",
    "ProofError",
    "ProtocolError",
    "Scalar",
    "Signature",
    "SignatureError",
    "SigningContext",
    "Statement",
    "Transcript",
    "User",
    "UserPublicKey",
    "UserSecretKey",
    "channel_pair",
    "verify_credential",
]
