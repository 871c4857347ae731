from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..core.constants import SCAN_GAP_MS, TERMINATOR_KEYS
from .model import CardToken, EventKind, InputEvent, TokenizerState

logger = logging.getLogger(__name__)


def classify(event: InputEvent) -> EventKind:
    if event.key in TERMINATOR_KEYS:
        return EventKind.TERMINATOR
    if len(event.key) == 1 and event.key.isprintable():
        return EventKind.CHAR
    return EventKind.IGNORED


class KeystrokeTokenizer:
    """Decodes bursts of keystrokes from a keyboard-emulating card reader.

    A reader types the card id far faster than a person and finishes with
    Enter. Characters are buffered while they keep arriving within
    ``gap_ms`` of each other; a longer pause starts a new buffer, and only an
    explicit terminator turns the buffer into a token.

    States: IDLE (empty buffer) and ACCUMULATING. Nothing is buffered while
    scanning mode is off.
    """

    def __init__(self, *, gap_ms: int = SCAN_GAP_MS):
        self._gap_ms = int(gap_ms)
        self._enabled = False
        self._reset()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def state(self) -> TokenizerState:
        return self._state

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    def enable(self) -> None:
        self._enabled = True
        self._reset()

    def disable(self) -> None:
        self._enabled = False
        self._reset()

    def gap_exceeded(self, timestamp_ms: int) -> bool:
        if self._last_ms is None:
            return False
        return timestamp_ms - self._last_ms > self._gap_ms

    def feed(self, event: InputEvent) -> Optional[CardToken]:
        """Process one event; returns a token when a terminator closes a buffer."""

        if not self._enabled:
            return None

        kind = classify(event)
        if kind is EventKind.IGNORED:
            return None

        if self.gap_exceeded(event.timestamp_ms):
            if self._buffer:
                logger.debug("Scan buffer dropped after gap (%d chars)", len(self._buffer))
            self._reset()
        self._last_ms = event.timestamp_ms

        if kind is EventKind.CHAR:
            self._buffer.append(event.key)
            self._state = TokenizerState.ACCUMULATING
            return None

        if not self._buffer:
            return None
        token = CardToken(value="".join(self._buffer))
        self._reset(keep_clock=True)
        return token

    def feed_many(self, events: Iterable[InputEvent]) -> List[CardToken]:
        tokens = []
        for event in events:
            token = self.feed(event)
            if token:
                tokens.append(token)
        return tokens

    def _reset(self, *, keep_clock: bool = False) -> None:
        self._buffer: List[str] = []
        self._state = TokenizerState.IDLE
        if not keep_clock:
            self._last_ms: Optional[int] = None
