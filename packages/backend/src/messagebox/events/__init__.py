"""Broadcastable domain events."""

from messagebox.events.message import NewMessage, NewMessagePayload

__all__ = ["NewMessage", "NewMessagePayload"]
