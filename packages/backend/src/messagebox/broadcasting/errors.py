"""Broadcast error taxonomy.

Learn: None of these are caught inside the pipeline. The dispatcher logs
and re-raises, so the caller of dispatch() always learns about a failure.
"""


class BroadcastError(Exception):
    """Base class for every broadcasting failure."""
    pass


class ConstructionError(BroadcastError):
    """Raised when an event is built with fields of the wrong type."""
    pass


class ValidationError(BroadcastError):
    """Raised when a payload does not match its declared model.

    Always raised before enqueue — a payload that fails validation
    never reaches the transport.
    """
    pass


class DeliveryError(BroadcastError):
    """Raised by a queue driver that could not accept the broadcast."""
    pass
