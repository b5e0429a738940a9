"""messagebox CLI — send and watch broadcasts from a terminal.

Usage:
    messagebox send 1 "Hello from server!"       # Dispatch a NewMessage
    messagebox send 1 "hi" --driver log          # Override the broadcast driver
    messagebox listen                            # Print broadcasts on message-box
    messagebox listen -c message-box -c other    # Several channels at once
    messagebox config                            # Effective settings
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import sys
from typing import Optional

import click
from redis.exceptions import RedisError

from messagebox import __version__
from messagebox.broadcasting import BroadcastError, create_dispatcher
from messagebox.config import Settings
from messagebox.events import NewMessage
from messagebox.events.types import MESSAGE_BOX_CHANNEL
from messagebox.log import configure_logging

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        # No running loop — normal CLI invocation
        return asyncio.run(coro)
    else:
        # Already inside an event loop (e.g. test runner) — run in a thread
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _settings(**overrides):
    try:
        return Settings(**overrides)
    except ValueError as e:
        click.secho(f"Error: invalid configuration: {e}", fg="red", err=True)
        sys.exit(2)


def _redis_unreachable(url: str, error: Exception):
    click.secho(f"Error: Redis not reachable at {url}: {error}", fg="red", err=True)
    sys.exit(1)


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="messagebox")
def main():
    """messagebox — dispatch chat message broadcasts and watch channels."""


# ---------------------------------------------------------------------------
# messagebox send
# ---------------------------------------------------------------------------


@main.command()
@click.argument("sender_id", type=int)
@click.argument("message")
@click.option(
    "--driver",
    type=click.Choice(["redis", "memory", "log", "null"]),
    help="Broadcast driver override (default: MESSAGEBOX_BROADCAST_DRIVER)",
)
def send(sender_id: int, message: str, driver: Optional[str]):
    """Broadcast MESSAGE from SENDER_ID on the message-box channel."""
    settings = _settings(**({"broadcast_driver": driver} if driver else {}))
    configure_logging(settings.log_level)

    async def _send():
        redis = None
        if settings.broadcast_driver == "redis":
            from messagebox.realtime.pubsub import close_redis, init_redis

            redis = await init_redis(settings.redis_url)
        try:
            dispatcher = create_dispatcher(settings, redis=redis)
            return await dispatcher.dispatch(NewMessage(sender_id, message))
        finally:
            if redis is not None:
                await close_redis()

    try:
        receipt = _run(_send())
    except BroadcastError as e:
        click.secho(f"Error: broadcast failed: {e}", fg="red", err=True)
        sys.exit(1)
    except RedisError as e:
        _redis_unreachable(settings.redis_url, e)

    click.echo(_pretty_json(receipt.to_envelope()))


# ---------------------------------------------------------------------------
# messagebox listen
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--channel", "-c", "channels",
    multiple=True,
    default=[MESSAGE_BOX_CHANNEL],
    show_default=True,
    help="Channel to subscribe to (repeatable)",
)
def listen(channels: tuple[str, ...]):
    """Print every broadcast received on the given channels (Ctrl-C to stop)."""
    settings = _settings()
    configure_logging(settings.log_level)

    async def _listen():
        from messagebox.realtime import pubsub

        redis = await pubsub.init_redis(settings.redis_url)
        try:
            async for envelope in pubsub.listen(
                channels, redis=redis, prefix=settings.channel_prefix
            ):
                click.echo(json.dumps(envelope, default=str))
        finally:
            await pubsub.close_redis()

    click.secho(f"Listening on {', '.join(channels)}", fg="cyan", err=True)
    try:
        _run(_listen())
    except RedisError as e:
        _redis_unreachable(settings.redis_url, e)
    except KeyboardInterrupt:
        pass


# ---------------------------------------------------------------------------
# messagebox config
# ---------------------------------------------------------------------------


@main.command()
def config():
    """Show the effective configuration."""
    click.echo(_pretty_json(_settings().model_dump()))


if __name__ == "__main__":
    main()
