from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Dict, Optional

from supabase import acreate_client

from ..database.connection import SupabaseConfig
from .change_feed import ChangeFeed, Subscription

logger = logging.getLogger(__name__)


class _ThreadedSubscription(Subscription):
    """Runs one realtime channel on a daemon thread with its own event loop."""

    def __init__(
        self,
        config: SupabaseConfig,
        *,
        channel: str,
        table: str,
        row_filter: str,
        callback: Callable[[Dict[str, Any]], None],
    ):
        self._config = config
        self._channel_name = channel
        self._table = table
        self._filter = row_filter
        self._callback = callback
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop: Optional[asyncio.Event] = None
        self._ready = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"realtime-{channel}", daemon=True)

    def start(self, *, timeout: float = 5.0) -> None:
        """Start the listener and wait until the channel is subscribed (or failed)."""
        self._thread.start()
        if not self._ready.wait(timeout):
            logger.warning("Realtime channel %s not subscribed after %.1fs", self._channel_name, timeout)

    def release(self) -> None:
        if self._loop is not None and self._stop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._stop.set)
        self._thread.join(timeout=5.0)
        logger.info("Realtime channel %s released", self._channel_name)

    def _run(self) -> None:
        try:
            asyncio.run(self._listen())
        except Exception:
            logger.exception("Realtime channel %s stopped unexpectedly", self._channel_name)
        finally:
            self._ready.set()

    async def _listen(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._stop = asyncio.Event()

        client = await acreate_client(self._config.url, self._config.key)
        channel = client.channel(self._channel_name)
        await channel.on_postgres_changes(
            "INSERT",
            schema="public",
            table=self._table,
            filter=self._filter,
            callback=self._dispatch,
        ).subscribe()
        logger.info("Realtime channel %s subscribed (%s, %s)", self._channel_name, self._table, self._filter)
        self._ready.set()

        try:
            await self._stop.wait()
        finally:
            await client.remove_channel(channel)

    def _dispatch(self, payload: Dict[str, Any]) -> None:
        try:
            self._callback(payload)
        except Exception:
            logger.exception("Realtime handler failed on channel %s", self._channel_name)


class SupabaseChangeFeed(ChangeFeed):
    def __init__(self, config: SupabaseConfig):
        self._config = config

    def subscribe_inserts(
        self,
        *,
        channel: str,
        table: str,
        row_filter: str,
        callback: Callable[[Dict[str, Any]], None],
    ) -> Subscription:
        subscription = _ThreadedSubscription(
            self._config,
            channel=channel,
            table=table,
            row_filter=row_filter,
            callback=callback,
        )
        subscription.start()
        return subscription
