#!/usr/bin/env python3
"""
messagebox Quickstart — one message through the whole pipeline.

Builds a NewMessage → dispatches it → reads it back off an in-process
memory queue, the same way a subscriber would see it.
Run with: python examples/quickstart.py

Requires: pip install -e .
No Redis needed (uses the memory driver).
"""

import asyncio
import json

from messagebox.broadcasting import BroadcastDispatcher
from messagebox.broadcasting.queues import MemoryBroadcastQueue
from messagebox.events import NewMessage


async def main():
    queue = MemoryBroadcastQueue()
    dispatcher = BroadcastDispatcher(queue)

    # ── Dispatch ──────────────────────────────────────────────────
    print("1. Dispatching NewMessage(sender_id=1)...")
    receipt = await dispatcher.dispatch(NewMessage(1, "Hello from server!"))
    print(f"   Queued on channel: {receipt.channel.name}")
    print(f"   Event name:        {receipt.event}")

    # ── Consume ───────────────────────────────────────────────────
    print("\n2. Reading it back off the queue...")
    queued = await queue.get()
    print(f"   {json.dumps(queued.to_envelope())}")

    print(f"\nDone. Stats: {dispatcher.stats}")


if __name__ == "__main__":
    asyncio.run(main())
