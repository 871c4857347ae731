from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Lesson:
    """A recurring weekly lesson (day_of_week: 1 = Monday ... 5 = Friday)."""

    lesson_id: str
    class_id: str
    day_of_week: int
    start_time: time
    end_time: time
    room: str
    class_name: Optional[str] = None


@dataclass(frozen=True)
class ScheduleSlot:
    label: str
    cells: list[Optional[Lesson]]


@dataclass(frozen=True)
class WeeklyGrid:
    days: list[str]
    slots: list[ScheduleSlot]
