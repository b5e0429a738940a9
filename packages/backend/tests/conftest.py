"""Test fixtures — dispatchers wired to in-memory doubles.

Learn: Nothing here touches a real Redis. The dispatcher takes its queue
as a constructor argument, so each test builds its own with a spy queue
(RecordingBroadcastQueue) and inspects what was enqueued.

Redis-facing code is tested against AsyncMock clients instead.
"""

from unittest.mock import AsyncMock

import pytest
import structlog

from messagebox.broadcasting import BroadcastDispatcher
from messagebox.broadcasting.testing import FakeDispatcher, RecordingBroadcastQueue
from messagebox.config import reset_settings


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo configure_logging() calls made by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test reads MESSAGEBOX_* env vars anew."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture()
def recording_queue():
    """Spy queue that records every enqueue() call."""
    return RecordingBroadcastQueue()


@pytest.fixture()
def dispatcher(recording_queue):
    """Real dispatcher in front of the spy queue."""
    return BroadcastDispatcher(recording_queue)


@pytest.fixture()
def fake_dispatcher():
    """Dispatcher stand-in that only records events."""
    return FakeDispatcher()


@pytest.fixture()
def redis_mock():
    """Redis client double — publish() reports one receiver."""
    redis = AsyncMock()
    redis.publish.return_value = 1
    return redis
