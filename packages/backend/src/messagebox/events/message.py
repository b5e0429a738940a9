"""NewMessage — broadcast when a chat message is accepted.

Learn: The event is a value object. Both fields are set once and the
dataclass is frozen, so the payload a subscriber receives is exactly
what the producer built — nothing can change it in between.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from messagebox.broadcasting.channels import Channel
from messagebox.broadcasting.contracts import ShouldBroadcast
from messagebox.broadcasting.errors import ConstructionError
from messagebox.events.types import MESSAGE_BOX_CHANNEL, MESSAGE_SENT


class NewMessagePayload(BaseModel):
    """Wire payload for NewMessage: exactly these two keys."""

    sender_id: int
    message: str

    model_config = ConfigDict(strict=True, extra="forbid")


@dataclass(frozen=True)
class NewMessage(ShouldBroadcast):
    sender_id: int
    message: str

    payload_model = NewMessagePayload

    def __post_init__(self):
        # bool is an int subclass; a True sender is a bug upstream
        if not isinstance(self.sender_id, int) or isinstance(self.sender_id, bool):
            raise ConstructionError(
                f"sender_id must be an int, got {type(self.sender_id).__name__}"
            )
        if not isinstance(self.message, str):
            raise ConstructionError(
                f"message must be a str, got {type(self.message).__name__}"
            )

    def resolve_channel(self) -> Channel:
        return Channel(MESSAGE_BOX_CHANNEL)

    def serialize_payload(self) -> dict[str, Any]:
        return {
            "sender_id": self.sender_id,
            "message": self.message,
        }

    def broadcast_as(self) -> str:
        return MESSAGE_SENT
