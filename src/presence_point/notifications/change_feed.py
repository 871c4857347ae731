from __future__ import annotations

from typing import Any, Callable, Dict, Protocol


class Subscription(Protocol):
    def release(self) -> None:
        raise NotImplementedError


class ChangeFeed(Protocol):
    """Push channel for row inserts matching a PostgREST-style filter."""

    def subscribe_inserts(
        self,
        *,
        channel: str,
        table: str,
        row_filter: str,
        callback: Callable[[Dict[str, Any]], None],
    ) -> Subscription:
        raise NotImplementedError
