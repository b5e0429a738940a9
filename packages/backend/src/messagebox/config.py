"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with MESSAGEBOX_ prefix.
No YAML files, no file-based config — just env vars (12-factor app style).

Learn: the broadcast driver is picked once at process start. Every
dispatcher built from these settings holds on to that one transport.
"""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings

# Drivers that only reach subscribers inside the current process
LOCAL_ONLY_DRIVERS = {"memory", "null"}


class Settings(BaseSettings):
    """All app configuration. Set via MESSAGEBOX_* env vars."""

    # Runtime
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Redis (broadcast transport)
    redis_url: str = "redis://localhost:6379/0"

    # Broadcasting
    broadcast_driver: Literal["redis", "memory", "log", "null"] = "redis"
    channel_prefix: str = "messagebox:channel:"
    memory_queue_size: int = 1000

    model_config = {"env_prefix": "MESSAGEBOX_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse in-process drivers outside development."""
        if (
            self.environment != "development"
            and self.broadcast_driver in LOCAL_ONLY_DRIVERS
        ):
            raise ValueError(
                f"MESSAGEBOX_BROADCAST_DRIVER={self.broadcast_driver!r} cannot "
                "reach subscribers in other processes. Use 'redis' or 'log' in "
                "non-development environments."
            )
        return self


# Singleton, built on first use so importing never reads the environment
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (for testing)."""
    global _settings
    _settings = None
