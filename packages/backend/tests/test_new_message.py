"""NewMessage event tests.

Learn: Tests cover:
1. Channel resolution (always message-box)
2. Exact wire payload — no more, no fewer keys
3. Idempotent serialization
4. Value-object semantics (frozen, type-checked at construction)
"""

import dataclasses

import pytest

from messagebox.broadcasting import (
    Channel,
    ConstructionError,
    channel_for,
    serialize,
)
from messagebox.events import NewMessage
from messagebox.events.types import MESSAGE_SENT


CASES = [
    (1, "Hello from server!"),
    (1, "Unit test message"),
    (42, ""),
    (0, "ünïcødé ✓"),
    (-7, "line one\nline two"),
    (2**40, "x" * 10_000),
]


# ═══════════════════════════════════════════════════════════
# Channel
# ═══════════════════════════════════════════════════════════


@pytest.mark.parametrize("sender_id,message", CASES)
def test_resolves_message_box_channel(sender_id, message):
    """Every NewMessage goes out on the message-box channel."""
    event = NewMessage(sender_id, message)
    assert event.resolve_channel().name == "message-box"
    assert channel_for(event) == Channel("message-box")


def test_channel_str_is_name():
    assert str(NewMessage(1, "hi").resolve_channel()) == "message-box"


# ═══════════════════════════════════════════════════════════
# Payload
# ═══════════════════════════════════════════════════════════


@pytest.mark.parametrize("sender_id,message", CASES)
def test_payload_is_exactly_sender_and_message(sender_id, message):
    """Payload has exactly the two declared keys."""
    event = NewMessage(sender_id=sender_id, message=message)
    assert event.serialize_payload() == {"sender_id": sender_id, "message": message}
    assert serialize(event) == {"sender_id": sender_id, "message": message}


def test_payload_key_order_is_stable():
    """Golden output — keys always come out in the same order."""
    assert list(serialize(NewMessage(1, "hi"))) == ["sender_id", "message"]


def test_serialization_is_idempotent():
    event = NewMessage(1, "Hello from server!")
    first = serialize(event)
    second = serialize(event)
    assert first == second
    # Each call returns a fresh dict, so mutating one can't affect the next
    first["message"] = "tampered"
    assert serialize(event)["message"] == "Hello from server!"


def test_empty_message_is_allowed():
    assert serialize(NewMessage(1, "")) == {"sender_id": 1, "message": ""}


def test_event_name():
    assert NewMessage(1, "hi").broadcast_as() == MESSAGE_SENT == "message.sent"


# ═══════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════


def test_fields_are_immutable():
    event = NewMessage(1, "Hello")
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.message = "changed"
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.sender_id = 2
    assert event.sender_id == 1
    assert event.message == "Hello"


@pytest.mark.parametrize(
    "sender_id,message",
    [
        ("1", "hi"),
        (1.0, "hi"),
        (True, "hi"),
        (None, "hi"),
        (1, None),
        (1, b"bytes"),
        (1, 123),
    ],
)
def test_wrong_types_raise_construction_error(sender_id, message):
    with pytest.raises(ConstructionError):
        NewMessage(sender_id, message)


def test_missing_fields_fail():
    with pytest.raises(TypeError):
        NewMessage(1)


def test_events_compare_by_value():
    assert NewMessage(1, "a") == NewMessage(1, "a")
    assert NewMessage(1, "a") != NewMessage(2, "a")
