"""Channels — named topics that subscribers attach to.

Learn: A channel is just a value. Private and presence channels only
differ by a name prefix, which is what subscribers (and any auth layer
in front of them) key off.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Channel:
    """A public broadcast channel."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PrivateChannel(Channel):
    """A channel whose subscribers must be authorized."""

    prefix = "private-"

    def __post_init__(self):
        if not self.name.startswith(self.prefix):
            object.__setattr__(self, "name", f"{self.prefix}{self.name}")


@dataclass(frozen=True)
class PresenceChannel(PrivateChannel):
    """A private channel that also tracks who is subscribed."""

    prefix = "presence-"


DEFAULT_CHANNEL_PREFIX = "messagebox:channel:"


def channel_key(channel: Channel | str, prefix: str = DEFAULT_CHANNEL_PREFIX) -> str:
    """Transport key for a channel, shared by publishers and subscribers."""
    name = channel.name if isinstance(channel, Channel) else channel
    return f"{prefix}{name}"
