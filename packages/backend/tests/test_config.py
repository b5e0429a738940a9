"""Settings tests — env prefix, defaults, production guard."""

import pytest

from messagebox.config import Settings


def test_defaults(monkeypatch):
    for var in ("ENVIRONMENT", "BROADCAST_DRIVER", "CHANNEL_PREFIX", "REDIS_URL"):
        monkeypatch.delenv(f"MESSAGEBOX_{var}", raising=False)

    s = Settings()
    assert s.environment == "development"
    assert s.broadcast_driver == "redis"
    assert s.channel_prefix == "messagebox:channel:"
    assert s.redis_url == "redis://localhost:6379/0"


def test_reads_prefixed_env_vars(monkeypatch):
    monkeypatch.setenv("MESSAGEBOX_BROADCAST_DRIVER", "log")
    monkeypatch.setenv("MESSAGEBOX_MEMORY_QUEUE_SIZE", "12")

    s = Settings()
    assert s.broadcast_driver == "log"
    assert s.memory_queue_size == 12


def test_unknown_driver_rejected():
    with pytest.raises(ValueError):
        Settings(broadcast_driver="carrier-pigeon")


@pytest.mark.parametrize("driver", ["memory", "null"])
def test_local_drivers_rejected_outside_development(driver):
    with pytest.raises(ValueError, match="cannot reach subscribers"):
        Settings(environment="production", broadcast_driver=driver)


@pytest.mark.parametrize("driver", ["redis", "log"])
def test_shared_drivers_allowed_in_production(driver):
    assert Settings(environment="production", broadcast_driver=driver).broadcast_driver == driver
