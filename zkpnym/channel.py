"""Duplex message channels and the message shapes the protocols exchange."""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import Dict, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ProtocolError
from .group import Point, Scalar

logger = logging.getLogger(__name__)

Record = Dict[str, object]


class Channel(abc.ABC):
    """Ordered, reliable, asynchronous duplex channel between two parties."""

    @abc.abstractmethod
    async def send(self, message: Record) -> None:
        """Deliver one labelled record to the peer."""

    @abc.abstractmethod
    async def receive(self) -> Record:
        """Wait for the next labelled record sent by the peer."""


class MemoryChannel(Channel):
    """In-process channel end backed by one queue per direction."""

    def __init__(self, outbox: asyncio.Queue, inbox: asyncio.Queue) -> None:
        self._outbox = outbox
        self._inbox = inbox

    async def send(self, message: Record) -> None:
        await self._outbox.put(dict(message))

    async def receive(self) -> Record:
        return await self._inbox.get()


def channel_pair() -> Tuple[MemoryChannel, MemoryChannel]:
    """Create two connected channel ends."""

    forward: asyncio.Queue = asyncio.Queue()
    backward: asyncio.Queue = asyncio.Queue()
    return MemoryChannel(forward, backward), MemoryChannel(backward, forward)


class Message(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid", frozen=True)


class Commitments(Message):
    a: Point
    b: Point


class Challenge(Message):
    c: Scalar


class Answer(Message):
    y: Scalar


class NymBase(Message):
    a_: Point
    b_: Point


class NymPoint(Message):
    a: Point


class NymResponse(Message):
    b: Point


class IssuedPoints(Message):
    A: Point
    B: Point


M = TypeVar("M", bound=Message)


async def send_message(channel: Channel, message: Message) -> None:
    logger.debug("send %s", type(message).__name__)
    await channel.send(dict(message))


async def receive_message(channel: Channel, model: Type[M]) -> M:
    record = await channel.receive()
    try:
        message = model.model_validate(record)
    except ValidationError as exc:
        raise ProtocolError(f"Expected {model.__name__} message") from exc
    logger.debug("receive %s", model.__name__)
    return message


__all__ = [
    "Answer",
    "Challenge",
    "Channel",
    "Commitments",
    "IssuedPoints",
    "MemoryChannel",
    "Message",
    "NymBase",
    "NymPoint",
    "NymResponse",
    "channel_pair",
    "receive_message",
    "send_message",
]
