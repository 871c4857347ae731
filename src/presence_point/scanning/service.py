from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Mapping, Optional

from ..attendance.model import ScanResult
from ..attendance.recorder import AttendanceRecorder
from ..core.exceptions import ValidationError
from .model import InputEvent
from .sessions import ScanSessionRegistry


def parse_events(raw: Iterable[Mapping]) -> List[InputEvent]:
    """Build events from the JSON sent by the browser ({"key": ..., "t": ...})."""

    events = []
    for item in raw:
        try:
            events.append(InputEvent(key=str(item["key"]), timestamp_ms=int(item["t"])))
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Ogiltig tangenthändelse")
    return events


class ScanService:
    """Use case: scanning mode for one browser session, fed with raw key events."""

    def __init__(self, sessions: ScanSessionRegistry, recorder: AttendanceRecorder):
        self._sessions = sessions
        self._recorder = recorder

    def set_mode(self, session_key: str, *, enabled: bool) -> bool:
        return self._sessions.set_mode(session_key, enabled=enabled)

    def is_enabled(self, session_key: str) -> bool:
        return self._sessions.is_enabled(session_key)

    def end_session(self, session_key: str) -> None:
        self._sessions.discard(session_key)

    def process(
        self,
        session_key: str,
        events: Iterable[InputEvent],
        *,
        school_id: Optional[str],
        now: Optional[datetime] = None,
    ) -> List[ScanResult]:
        """Decode one key batch and record every card in it.

        The session stays held until the last card is recorded, so a second
        batch from the same browser waits instead of interleaving.
        """

        with self._sessions.hold(session_key) as tokenizer:
            return [
                self._recorder.record_scan(token, school_id=school_id, now=now)
                for token in tokenizer.feed_many(events)
            ]
