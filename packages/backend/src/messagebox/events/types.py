"""Event and channel name constants.

Learn: Centralizing names as constants prevents typos and makes it
easy to discover everything that goes over the wire. Subscribers
match on these exact strings.
"""

# ─── Chat ────────────────────────────────────────────────

MESSAGE_SENT = "message.sent"

# ─── Channels ────────────────────────────────────────────

MESSAGE_BOX_CHANNEL = "message-box"
