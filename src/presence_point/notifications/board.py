from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Deque, List

from ..common.datetime_utils import now_local
from ..core.constants import NOTICE_BOARD_SIZE
from ..core.enums import NoticeLevel


@dataclass(frozen=True)
class Notice:
    seq: int
    level: NoticeLevel
    title: str
    description: str
    created_at: datetime


class NoticeBoard:
    """Bounded list of pushed notices that browsers poll with a cursor.

    Pushes arrive from the realtime thread while request threads read, so
    every access holds the lock.
    """

    def __init__(self, *, size: int = NOTICE_BOARD_SIZE, clock: Callable[[], datetime] = now_local):
        self._lock = threading.Lock()
        self._notices: Deque[Notice] = deque(maxlen=size)
        self._seq = 0
        self._clock = clock

    def push(self, level: NoticeLevel, title: str, description: str = "") -> Notice:
        with self._lock:
            self._seq += 1
            notice = Notice(seq=self._seq, level=level, title=title, description=description, created_at=self._clock())
            self._notices.append(notice)
            return notice

    def since(self, cursor: int) -> List[Notice]:
        with self._lock:
            return [n for n in self._notices if n.seq > cursor]

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._seq
