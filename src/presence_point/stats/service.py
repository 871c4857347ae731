from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..classes.service import ClassService
from ..common.datetime_utils import day_window, now_local, trailing_window
from ..core.constants import DEFAULT_WINDOW_DAYS
from ..students.repository import StudentRepository
from ..teachers.model import Teacher
from . import aggregator


@dataclass(frozen=True)
class DashboardStats:
    student_count: int
    class_count: int
    present_today: int
    absent_today: int
    daily_rate: float
    week_present: int
    week_total: int
    weekly_rate: float


class StatsService:
    """Fetches the records behind the dashboard cards and derives the numbers."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassService,
        *,
        window_days: int = DEFAULT_WINDOW_DAYS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._window_days = int(window_days)
        self._clock = clock

    def dashboard(self, teacher: Teacher, *, now: Optional[datetime] = None) -> DashboardStats:
        now = now or self._clock()
        class_count = self._classes.count_for_teacher(teacher)

        if not teacher.school_id:
            return DashboardStats(0, class_count, 0, 0, 0.0, 0, 0, 0.0)

        school_id = teacher.school_id
        total_students = self._students.count_for_school(school_id)

        start, end = day_window(now)
        today = self._attendance.list_statuses_between(start=start, end=end, school_id=school_id)
        present_today = aggregator.present_count(today)

        # Rolling window that also covers the rest of today.
        week_start, _ = trailing_window(now, days=self._window_days)
        week = self._attendance.list_statuses_between(start=week_start, end=end, school_id=school_id)
        week_present = aggregator.present_count(week)

        return DashboardStats(
            student_count=total_students,
            class_count=class_count,
            present_today=present_today,
            absent_today=aggregator.absent_count(today),
            daily_rate=aggregator.daily_rate(present_today, total_students),
            week_present=week_present,
            week_total=len(week),
            weekly_rate=aggregator.weekly_rate(week_present, len(week)),
        )
