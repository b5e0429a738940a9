"""messagebox — real-time message broadcast pipeline.

A chat message becomes an immutable event, the event resolves its own
channel and wire payload, and a dispatcher hands it to a queuing
transport for fan-out to that channel's subscribers.
"""

__version__ = "0.1.0"
