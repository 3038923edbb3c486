"""Command line interface for the pseudonym and credential protocols."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Dict

from zkpnym import session
from zkpnym.errors import ProofError, SignatureError
from zkpnym.fiat_shamir import SigningContext
from zkpnym.keys import OrgPublicKey, OrgSecretKey, UserSecretKey
from zkpnym.protocol import Org, User, verify_credential
from zkpnym.records import Cred


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    keygen_parser = subparsers.add_parser("keygen", help="Generate a user or organization key")
    keygen_parser.add_argument("kind", choices=["user", "org"], help="Kind of key to generate")

    demo_parser = subparsers.add_parser(
        "demo",
        help="Run pseudonym, issuance and transfer end to end in-process",
    )
    demo_parser.add_argument(
        "--with-ca",
        action="store_true",
        help="Root the pseudonym at the base point and check it against the user key",
    )
    demo_parser.add_argument(
        "--output",
        help="Optional file path to store the issued credential JSON",
    )

    verify_parser = subparsers.add_parser(
        "verify-credential",
        help="Check a credential's issuance proofs against an issuer public key",
    )
    verify_parser.add_argument("credential", help="Path to the credential JSON data")
    verify_parser.add_argument("issuer", help="Hex-encoded issuer public key")

    return parser.parse_args(argv)


async def run_demo(with_ca: bool) -> Dict[str, object]:
    usk = UserSecretKey.random()
    user = User(usk)
    issuer_key = OrgSecretKey.random()
    issuer = Org(issuer_key)
    verifier = Org(OrgSecretKey.random())

    steps: Dict[str, object] = {}
    steps["issuer_ownership"] = await session.check_ownership(issuer_key, issuer_key.public_key)

    nym, _ = await session.establish_nym(
        user,
        issuer,
        with_ca=with_ca,
        for_key=usk.public_key if with_ca else None,
    )
    steps["authenticate"] = await session.authenticate(user, issuer, nym, nym)
    cred = await session.issue(user, issuer, nym)
    steps["issued_credential"] = verify_credential(cred, issuer.public_key)

    transfer_nym, _ = await session.establish_nym(user, verifier)
    steps["transfer"] = await session.transfer(user, verifier, transfer_nym, cred, issuer.public_key)

    context = SigningContext("zkp-nym-demo")
    context.append_message("message", "hello")
    signature = usk.sign_with_nym(transfer_nym, context.clone())
    steps["nym_signature"] = usk.public_key.verify_with_nym(transfer_nym, context.clone(), signature)

    return {
        "issuer_public_key": issuer.public_key.to_bytes().hex(),
        "nym": nym.to_dict(),
        "transfer_nym": transfer_nym.to_dict(),
        "credential": cred.to_dict(),
        "signature": signature.to_bytes().hex(),
        "steps": steps,
    }


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=getattr(logging, namespace.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if namespace.command == "keygen":
        key = UserSecretKey.random() if namespace.kind == "user" else OrgSecretKey.random()
        payload = {
            "kind": namespace.kind,
            "secret_key": key.to_bytes().hex(),
            "public_key": key.public_key.to_bytes().hex(),
        }
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "demo":
        try:
            payload = asyncio.run(run_demo(namespace.with_ca))
        except (ProofError, SignatureError) as exc:
            print(f"Demo failed: {exc}", file=sys.stderr)
            return 1
        if namespace.output:
            Path(namespace.output).write_text(json.dumps(payload["credential"], indent=2), encoding="utf-8")
        print(json.dumps(payload, indent=2))
        return 0

    if namespace.command == "verify-credential":
        cred_payload = json.loads(Path(namespace.credential).read_text(encoding="utf-8"))
        if "credential" in cred_payload:
            cred_payload = cred_payload["credential"]
        try:
            cred = Cred.from_dict(cred_payload)
            issuer = OrgPublicKey.from_bytes(bytes.fromhex(namespace.issuer))
        except (KeyError, ValueError) as exc:
            print(f"Invalid input: {exc}", file=sys.stderr)
            return 1
        try:
            verify_credential(cred, issuer)
        except ProofError as exc:
            print(json.dumps({"verified": False, "error": str(exc)}, indent=2))
            return 1
        print(json.dumps({"verified": True}, indent=2))
        return 0

    raise RuntimeError("Unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
