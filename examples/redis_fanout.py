#!/usr/bin/env python3
"""
messagebox Redis fan-out — two senders, one subscriber.

Subscribes to message-box, then dispatches messages from two senders
concurrently and prints what the subscriber receives.
Run with: python examples/redis_fanout.py

Requires: pip install -e .
Redis must be running: redis://localhost:6379/0 (or MESSAGEBOX_REDIS_URL)
"""

import asyncio
import json
import sys

from messagebox.broadcasting import BroadcastDispatcher
from messagebox.broadcasting.queues import RedisBroadcastQueue
from messagebox.config import get_settings
from messagebox.events import NewMessage
from messagebox.events.types import MESSAGE_BOX_CHANNEL
from messagebox.realtime.pubsub import channel_key, close_redis, init_redis


async def main():
    settings = get_settings()
    try:
        redis = await init_redis()
    except Exception as e:
        print(f"ERROR: Redis not reachable at {settings.redis_url}: {e}")
        sys.exit(1)

    # ── Subscribe first (pub/sub drops messages nobody is listening for)
    subscriber = redis.pubsub()
    await subscriber.subscribe(channel_key(MESSAGE_BOX_CHANNEL))

    dispatcher = BroadcastDispatcher(RedisBroadcastQueue(redis, prefix=settings.channel_prefix))

    print("1. Dispatching from two senders concurrently...")
    await asyncio.gather(
        dispatcher.dispatch(NewMessage(1, "Hello from sender 1")),
        dispatcher.dispatch(NewMessage(2, "Hello from sender 2")),
    )

    print("\n2. Subscriber received:")
    received = 0
    for _ in range(10):  # subscribe confirmations come back as None
        message = await subscriber.get_message(ignore_subscribe_messages=True, timeout=1.0)
        if message is None:
            continue
        received += 1
        print(f"   {json.dumps(json.loads(message['data']))}")
        if received == 2:
            break

    await subscriber.aclose()
    await close_redis()


if __name__ == "__main__":
    asyncio.run(main())
