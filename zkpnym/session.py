"""Run both parties of a protocol in-process over a fresh channel pair."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Optional, Tuple, TypeVar

from .channel import channel_pair
from .keys import OrgPublicKey, OrgSecretKey, UserPublicKey
from .protocol import Org, User
from .records import Cred, Nym

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")


async def run_exchange(first: Awaitable[A], second: Awaitable[B]) -> Tuple[A, B]:
    """Run two party coroutines; the first failure cancels the peer and is raised."""

    tasks = [asyncio.ensure_future(first), asyncio.ensure_future(second)]
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    for task in pending:
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)

    for task in tasks:
        if task in done and task.exception() is not None:
            logger.info("protocol run aborted: %s", task.exception())
            raise task.exception()  # type: ignore[misc]
    return tasks[0].result(), tasks[1].result()


async def establish_nym(
    user: User,
    org: Org,
    *,
    with_ca: bool = False,
    for_key: Optional[UserPublicKey] = None,
) -> Tuple[Nym, Nym]:
    user_end, org_end = channel_pair()
    return await run_exchange(
        user.generate_nym(user_end, with_ca=with_ca),
        org.generate_nym(org_end, for_key=for_key),
    )


async def authenticate(user: User, org: Org, user_nym: Nym, org_nym: Nym) -> str:
    """Authenticate ``user_nym`` to an organization that knows ``org_nym``."""

    user_end, org_end = channel_pair()
    _, result = await run_exchange(
        user.authenticate_nym(user_end, user_nym),
        org.authenticate_nym(org_end, org_nym),
    )
    return result


async def check_ownership(secret_key: OrgSecretKey, public_key: OrgPublicKey) -> str:
    prover_end, verifier_end = channel_pair()
    _, result = await run_exchange(
        secret_key.prove_ownership(prover_end),
        public_key.verify_ownership(verifier_end),
    )
    return result


async def issue(user: User, org: Org, nym: Nym) -> Cred:
    user_end, org_end = channel_pair()
    cred, _ = await run_exchange(
        user.issue_credential(user_end, nym, org.public_key),
        org.issue_credential(org_end, nym),
    )
    return cred


async def transfer(
    user: User,
    org: Org,
    nym: Nym,
    cred: Cred,
    source_key: OrgPublicKey,
) -> str:
    """Present ``cred`` to ``org`` under the pseudonym ``nym``."""

    user_end, org_end = channel_pair()
    _, result = await run_exchange(
        user.transfer_credential(user_end, nym, cred),
        org.transfer_credential(org_end, nym, cred, source_key),
    )
    return result


__all__ = [
    "authenticate",
    "check_ownership",
    "establish_nym",
    "issue",
    "run_exchange",
    "transfer",
]
