"""Broadcasting — events to channels to queued delivery.

Learn: The pipeline has four pieces:
1. An event that knows its channel and wire payload (contracts)
2. Channels — named topics subscribers attach to
3. A dispatcher that validates and hands events to a queue
4. Queue drivers — the transport that actually fans out (Redis, memory, ...)

Producers only ever talk to the dispatcher; they never see the transport.
"""

from messagebox.broadcasting.channels import Channel, PresenceChannel, PrivateChannel
from messagebox.broadcasting.contracts import (
    QueuedBroadcast,
    ShouldBroadcast,
    channel_for,
    serialize,
)
from messagebox.broadcasting.dispatcher import BroadcastDispatcher, create_dispatcher
from messagebox.broadcasting.errors import (
    BroadcastError,
    ConstructionError,
    DeliveryError,
    ValidationError,
)

__all__ = [
    "BroadcastDispatcher",
    "BroadcastError",
    "Channel",
    "ConstructionError",
    "DeliveryError",
    "PresenceChannel",
    "PrivateChannel",
    "QueuedBroadcast",
    "ShouldBroadcast",
    "ValidationError",
    "channel_for",
    "create_dispatcher",
    "serialize",
]
