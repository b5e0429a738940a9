"""Redis pub/sub — connection pool and subscriber helpers.

Learn: One Redis connection pool per process, created at startup and
closed at shutdown. The broadcast driver publishes through it; listeners
subscribe through it.

Channel naming: messagebox:channel:{channel_name}
Subscribers only receive the channels they asked for.
"""

import json
from typing import Any, AsyncIterator, Iterable, Optional

import redis.asyncio as aioredis
import structlog

from messagebox.broadcasting import channels
from messagebox.broadcasting.channels import Channel
from messagebox.config import get_settings

logger = structlog.get_logger()

# Global Redis connection pool (initialized at process start)
_redis: Optional[aioredis.Redis] = None


async def init_redis(url: Optional[str] = None) -> aioredis.Redis:
    """Initialize the Redis connection pool."""
    global _redis
    _redis = aioredis.from_url(
        url or get_settings().redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    # Verify connection
    await _redis.ping()
    logger.info("messagebox.redis_connected", url=url or get_settings().redis_url)
    return _redis


async def close_redis() -> None:
    """Close the Redis connection pool."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def get_redis() -> aioredis.Redis:
    """Get the Redis connection (must be initialized first)."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


def channel_key(channel: Channel | str, prefix: Optional[str] = None) -> str:
    """Redis pub/sub key for a broadcast channel."""
    if prefix is None:
        prefix = get_settings().channel_prefix
    return channels.channel_key(channel, prefix)


async def listen(
    channel_names: Iterable[str],
    redis: Optional[aioredis.Redis] = None,
    prefix: Optional[str] = None,
) -> AsyncIterator[dict[str, Any]]:
    """Yield decoded broadcast envelopes from the given channels.

    Learn: Non-JSON messages are logged and skipped — a stray PUBLISH
    from another tool shouldn't kill a long-running subscriber.
    """
    r = redis or get_redis()
    keys = [channel_key(name, prefix) for name in channel_names]
    pubsub = r.pubsub()
    await pubsub.subscribe(*keys)
    try:
        async for message in pubsub.listen():
            if message["type"] != "message":
                continue
            try:
                yield json.loads(message["data"])
            except json.JSONDecodeError:
                logger.warning("messagebox.bad_envelope", key=message.get("channel"))
    finally:
        await pubsub.unsubscribe(*keys)
        await pubsub.aclose()
