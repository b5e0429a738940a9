"""Broadcast dispatcher — hands events to the queue, exactly once.

Learn: dispatch() is all-or-nothing:
1. broadcast_when() says no → skipped, nothing queued
2. Resolve channel + serialize payload (validation errors stop here)
3. enqueue() on the transport — exactly one call per dispatch
4. Transport errors are logged and re-raised, never swallowed

The dispatcher never waits for delivery to subscribers. It only waits
for the transport to accept the broadcast.

The queue is injected, so tests pass a RecordingBroadcastQueue instead
of monkeypatching a global.
"""

from dataclasses import dataclass
from typing import Optional

import redis.asyncio as aioredis
import structlog

from messagebox.broadcasting.contracts import (
    QueuedBroadcast,
    ShouldBroadcast,
    channel_for,
    serialize,
)
from messagebox.broadcasting.queues import BroadcastQueue, create_queue
from messagebox.config import Settings

logger = structlog.get_logger()


@dataclass
class DispatcherStats:
    """Runtime statistics for monitoring."""
    dispatched: int = 0
    skipped: int = 0
    failed: int = 0


class BroadcastDispatcher:
    """Queue broadcastable events for out-of-band delivery."""

    def __init__(self, queue: BroadcastQueue):
        self._queue = queue
        self.stats = DispatcherStats()

    @property
    def queue(self) -> BroadcastQueue:
        return self._queue

    async def dispatch(self, event: ShouldBroadcast) -> Optional[QueuedBroadcast]:
        """Queue an event for broadcast. Returns None if the event opted out."""
        name = event.broadcast_as()

        if not event.broadcast_when():
            self.stats.skipped += 1
            logger.info("broadcast.skipped", event_name=name)
            return None

        channel = channel_for(event)
        payload = serialize(event)

        try:
            await self._queue.enqueue(channel, payload, event=name)
        except Exception as e:
            self.stats.failed += 1
            logger.error(
                "broadcast.failed",
                event_name=name,
                channel=channel.name,
                error=str(e),
            )
            raise

        self.stats.dispatched += 1
        logger.info(
            "broadcast.queued",
            event_name=name,
            channel=channel.name,
            keys=list(payload),
        )
        return QueuedBroadcast(channel=channel, event=name, payload=payload)


def create_dispatcher(
    settings: Settings,
    redis: Optional[aioredis.Redis] = None,
) -> BroadcastDispatcher:
    """Build a dispatcher for the configured broadcast driver."""
    queue = create_queue(
        settings.broadcast_driver,
        redis=redis,
        prefix=settings.channel_prefix,
        maxsize=settings.memory_queue_size,
    )
    return BroadcastDispatcher(queue)
