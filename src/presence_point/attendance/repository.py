from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AbsenceNotice, AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_student_between(self, *, student_id: str, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records with start <= timestamp < end."""

        raise NotImplementedError

    def list_statuses_between(self, *, start: datetime, end: datetime, school_id: str) -> Sequence[AttendanceStatus]:
        """Statuses of records in [start, end) for students of one school."""

        raise NotImplementedError

    def list_recent_for_student(self, student_id: str, limit: int) -> Sequence[AttendanceRecord]:
        """Newest first, joined with the lesson's class name."""

        raise NotImplementedError

    def list_absences_since(self, *, since: datetime, limit: int) -> Sequence[AbsenceNotice]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: str,
        lesson_id: Optional[str],
        status: AttendanceStatus,
        timestamp: datetime,
        notes: Optional[str] = None,
    ) -> str:
        raise NotImplementedError
