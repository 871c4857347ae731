from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

from ..attendance.model import AbsenceNotice
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, trailing_window
from ..core.constants import ABSENCE_NOTICE_LIMIT, DEFAULT_WINDOW_DAYS
from ..core.enums import AttendanceStatus, NoticeLevel
from .board import NoticeBoard
from .change_feed import ChangeFeed, Subscription

logger = logging.getLogger(__name__)


class AbsenceFeed:
    """Recent absences plus a live subscription to new ones.

    The subscription handler only pushes a notice; pages re-read the
    absence list themselves, which has no side effects.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        board: NoticeBoard,
        change_feed: Optional[ChangeFeed] = None,
        *,
        days: int = DEFAULT_WINDOW_DAYS,
        limit: int = ABSENCE_NOTICE_LIMIT,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._board = board
        self._change_feed = change_feed
        self._days = int(days)
        self._limit = int(limit)
        self._clock = clock
        self._subscription: Optional[Subscription] = None

    @property
    def board(self) -> NoticeBoard:
        return self._board

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def recent(self, *, now: Optional[datetime] = None) -> Sequence[AbsenceNotice]:
        since, _ = trailing_window(now or self._clock(), days=self._days)
        return self._attendance.list_absences_since(since=since, limit=self._limit)

    def start(self) -> None:
        if self._subscription is not None or self._change_feed is None:
            return
        self._subscription = self._change_feed.subscribe_inserts(
            channel="attendance-changes",
            table="attendance_records",
            row_filter=f"status=eq.{AttendanceStatus.ABSENT.value}",
            callback=self._on_absence,
        )

    def stop(self) -> None:
        if self._subscription is None:
            return
        subscription, self._subscription = self._subscription, None
        subscription.release()

    def _on_absence(self, payload: Dict[str, Any]) -> None:
        logger.debug("Absence insert received: %s", payload)
        self._board.push(
            NoticeLevel.DANGER,
            "Ny frånvaro registrerad",
            "En elev har markerats som frånvarande",
        )
