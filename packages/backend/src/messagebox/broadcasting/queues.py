"""Queue drivers — the transport side of broadcasting.

Learn: The dispatcher depends on one operation, enqueue(channel, payload).
Each driver decides what "queued" means:

- redis:  PUBLISH to the channel's Redis key (fire-and-forget fan-out
          to every subscriber, in any process)
- memory: in-process asyncio.Queue (local dev, single process)
- log:    write the envelope to the log (debugging)
- null:   discard

Redis pub/sub is fire-and-forget. If no one is listening, the message
is lost. Delivery guarantees belong to the transport, not to us.
"""

import asyncio
import json
from typing import Any, Optional, Protocol

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError

from messagebox.broadcasting.channels import DEFAULT_CHANNEL_PREFIX, Channel, channel_key
from messagebox.broadcasting.contracts import QueuedBroadcast
from messagebox.broadcasting.errors import DeliveryError

logger = structlog.get_logger()

DRIVERS = ("redis", "memory", "log", "null")


class BroadcastQueue(Protocol):
    """Anything the dispatcher can hand a broadcast to."""

    async def enqueue(
        self,
        channel: Channel,
        payload: dict[str, Any],
        *,
        event: Optional[str] = None,
    ) -> None: ...


class RedisBroadcastQueue:
    """Publish broadcasts on Redis pub/sub.

    Channel naming: {prefix}{channel.name}, e.g. messagebox:channel:message-box
    """

    def __init__(self, redis: aioredis.Redis, prefix: str = DEFAULT_CHANNEL_PREFIX):
        self.redis = redis
        self.prefix = prefix

    def key_for(self, channel: Channel) -> str:
        return channel_key(channel, self.prefix)

    async def enqueue(
        self,
        channel: Channel,
        payload: dict[str, Any],
        *,
        event: Optional[str] = None,
    ) -> None:
        envelope = QueuedBroadcast(channel=channel, event=event or "", payload=payload)
        key = self.key_for(channel)
        try:
            receivers = await self.redis.publish(key, json.dumps(envelope.to_envelope()))
        except RedisError as e:
            raise DeliveryError(f"Redis publish to {key} failed: {e}") from e
        logger.debug("broadcast.published", key=key, receivers=receivers)


class MemoryBroadcastQueue:
    """In-process queue. Consumers call get() to receive broadcasts in order."""

    def __init__(self, maxsize: int = 1000):
        self._queue: asyncio.Queue[QueuedBroadcast] = asyncio.Queue(maxsize=maxsize)

    async def enqueue(
        self,
        channel: Channel,
        payload: dict[str, Any],
        *,
        event: Optional[str] = None,
    ) -> None:
        item = QueuedBroadcast(channel=channel, event=event or "", payload=dict(payload))
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull as e:
            raise DeliveryError(
                f"Memory queue is full ({self._queue.maxsize} pending broadcasts)"
            ) from e

    async def get(self) -> QueuedBroadcast:
        return await self._queue.get()

    def get_nowait(self) -> QueuedBroadcast:
        return self._queue.get_nowait()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()


class LogBroadcastQueue:
    """Write each broadcast to the structured log instead of delivering it."""

    def __init__(self):
        self.logger = structlog.get_logger("messagebox.broadcast.log")

    async def enqueue(
        self,
        channel: Channel,
        payload: dict[str, Any],
        *,
        event: Optional[str] = None,
    ) -> None:
        self.logger.info(
            "broadcast.logged",
            channel=channel.name,
            event_name=event,
            payload=payload,
        )


class NullBroadcastQueue:
    """Discard every broadcast."""

    async def enqueue(
        self,
        channel: Channel,
        payload: dict[str, Any],
        *,
        event: Optional[str] = None,
    ) -> None:
        return None


def create_queue(
    driver: str,
    *,
    redis: Optional[aioredis.Redis] = None,
    prefix: str = DEFAULT_CHANNEL_PREFIX,
    maxsize: int = 1000,
) -> BroadcastQueue:
    """Build the queue for a configured driver name."""
    if driver == "redis":
        if redis is None:
            raise RuntimeError("The redis broadcast driver needs a Redis client")
        return RedisBroadcastQueue(redis, prefix=prefix)
    if driver == "memory":
        return MemoryBroadcastQueue(maxsize=maxsize)
    if driver == "log":
        return LogBroadcastQueue()
    if driver == "null":
        return NullBroadcastQueue()
    raise ValueError(f"Unknown broadcast driver {driver!r} (expected one of {', '.join(DRIVERS)})")
