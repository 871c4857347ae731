"""Attendance counts and rates.

Two rates with different denominators are used on purpose:

- the daily rate compares today's presences with every enrolled student;
- the weekly (and per-student) rate compares presences with the rows
  actually recorded in the window.
"""

from __future__ import annotations

from typing import Iterable

from ..core.enums import AttendanceStatus


def count_status(statuses: Iterable[AttendanceStatus], status: AttendanceStatus) -> int:
    return sum(1 for s in statuses if s == status)


def present_count(statuses: Iterable[AttendanceStatus]) -> int:
    return count_status(statuses, AttendanceStatus.PRESENT)


def absent_count(statuses: Iterable[AttendanceStatus]) -> int:
    return count_status(statuses, AttendanceStatus.ABSENT)


def daily_rate(present: int, total_students: int) -> float:
    if total_students > 0:
        return present / total_students * 100
    return 0.0


def weekly_rate(present_in_window: int, total_rows_in_window: int) -> float:
    if total_rows_in_window > 0:
        return present_in_window / total_rows_in_window * 100
    return 0.0
