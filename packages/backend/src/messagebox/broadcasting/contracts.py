"""Broadcast contract — what an event must provide to be broadcast.

Learn: Every broadcastable event answers two questions about itself:
1. Which channel does it go out on?  (resolve_channel)
2. What do subscribers receive?      (serialize_payload)

The dispatcher never hardcodes either answer, so a new event type can
target a different channel (or a per-conversation one) by overriding
resolve_channel — no dispatcher changes needed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

import pydantic

from messagebox.broadcasting.channels import Channel
from messagebox.broadcasting.errors import ValidationError


class ShouldBroadcast(ABC):
    """Base class for events that are broadcast to a channel."""

    # Declared wire payload. When set, serialize() validates against it.
    payload_model: ClassVar[Optional[type[pydantic.BaseModel]]] = None

    def __init_subclass__(cls, **kwargs):
        """Reject concrete events with no way to build a payload.

        Learn: Subclasses that still leave resolve_channel abstract are
        intermediate bases and are let through.
        """
        super().__init_subclass__(**kwargs)
        if getattr(cls.resolve_channel, "__isabstractmethod__", False):
            return
        if (
            cls.payload_model is None
            and cls.serialize_payload is ShouldBroadcast.serialize_payload
        ):
            raise TypeError(
                f"{cls.__name__} must declare payload_model "
                "or override serialize_payload()"
            )

    @abstractmethod
    def resolve_channel(self) -> Channel:
        """The channel this event is broadcast on."""

    def serialize_payload(self) -> dict[str, Any]:
        """The wire payload.

        Learn: Only fields declared on payload_model are read. Anything
        else on the event (caches, private attrs) can't leak to clients.
        """
        return {name: getattr(self, name) for name in self.payload_model.model_fields}

    def broadcast_as(self) -> str:
        """Event name sent alongside the payload."""
        return type(self).__name__

    def broadcast_when(self) -> bool:
        """Return False to skip broadcasting this instance."""
        return True


@dataclass(frozen=True)
class QueuedBroadcast:
    """One broadcast as handed to the transport."""

    channel: Channel
    event: str
    payload: dict[str, Any] = field(default_factory=dict)

    def to_envelope(self) -> dict[str, Any]:
        """Transport envelope — `data` is the exact wire payload."""
        return {
            "event": self.event,
            "channel": self.channel.name,
            "data": dict(self.payload),
        }


def channel_for(event: ShouldBroadcast) -> Channel:
    """Resolve the channel an event broadcasts on."""
    return event.resolve_channel()


def serialize(event: ShouldBroadcast) -> dict[str, Any]:
    """Serialize an event to its wire payload, validating if it declares a model.

    Raises ValidationError if the payload doesn't match payload_model
    (missing keys, extra keys, wrong types).
    """
    payload = dict(event.serialize_payload())

    if event.payload_model is not None:
        try:
            event.payload_model.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"{type(event).__name__} payload is invalid: "
                f"{e.error_count()} error(s)"
            ) from e

    return payload
