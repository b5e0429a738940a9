"""Test doubles for broadcasting.

Learn: Two ways to observe a dispatch without a live transport:

1. RecordingBroadcastQueue — a real dispatcher, a spy queue. Proves the
   full path (channel resolution, serialization, exactly-once enqueue).
   Pass on_enqueue to inspect each call as it happens.
2. FakeDispatcher — replaces the dispatcher entirely and just records
   which events were dispatched. For code that only needs to prove it
   fired an event.
"""

from typing import Any, Callable, Optional

from messagebox.broadcasting.channels import Channel
from messagebox.broadcasting.contracts import QueuedBroadcast, ShouldBroadcast


class RecordingBroadcastQueue:
    """Spy queue — records every enqueue() call."""

    def __init__(
        self,
        on_enqueue: Optional[Callable[[QueuedBroadcast], Any]] = None,
        error: Optional[Exception] = None,
    ):
        self.on_enqueue = on_enqueue
        self.error = error
        self.calls: list[QueuedBroadcast] = []

    async def enqueue(
        self,
        channel: Channel,
        payload: dict[str, Any],
        *,
        event: Optional[str] = None,
    ) -> None:
        if self.error is not None:
            raise self.error
        call = QueuedBroadcast(channel=channel, event=event or "", payload=dict(payload))
        if self.on_enqueue is not None:
            self.on_enqueue(call)
        self.calls.append(call)

    def assert_enqueued_once(self) -> QueuedBroadcast:
        if len(self.calls) != 1:
            raise AssertionError(f"expected 1 enqueue, got {len(self.calls)}")
        return self.calls[0]

    def assert_enqueued(
        self,
        channel_name: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> QueuedBroadcast:
        for call in self.calls:
            if call.channel.name != channel_name:
                continue
            if payload is None or call.payload == payload:
                return call
        raise AssertionError(
            f"nothing enqueued on {channel_name!r} with payload {payload!r}; "
            f"calls: {self.calls!r}"
        )

    def assert_nothing_enqueued(self) -> None:
        if self.calls:
            raise AssertionError(f"expected no enqueue, got {self.calls!r}")


class FakeDispatcher:
    """Records dispatched events instead of queueing them."""

    def __init__(self):
        self.events: list[ShouldBroadcast] = []

    async def dispatch(self, event: ShouldBroadcast) -> None:
        self.events.append(event)

    def dispatched(self, event_type: type) -> list[ShouldBroadcast]:
        return [e for e in self.events if isinstance(e, event_type)]

    def assert_dispatched(
        self,
        event_type: type,
        predicate: Optional[Callable[[Any], bool]] = None,
        times: Optional[int] = None,
    ) -> list[ShouldBroadcast]:
        matches = self.dispatched(event_type)
        if predicate is not None:
            matches = [e for e in matches if predicate(e)]
        if not matches:
            raise AssertionError(f"{event_type.__name__} was not dispatched")
        if times is not None and len(matches) != times:
            raise AssertionError(
                f"{event_type.__name__} dispatched {len(matches)} time(s), expected {times}"
            )
        return matches

    def assert_not_dispatched(self, event_type: type) -> None:
        found = self.dispatched(event_type)
        if found:
            raise AssertionError(
                f"{event_type.__name__} was dispatched {len(found)} time(s)"
            )
