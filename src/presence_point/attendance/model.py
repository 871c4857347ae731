from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, ScanOutcome
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance decision at one instant. Never updated."""

    record_id: str
    student_id: str
    lesson_id: Optional[str]
    status: AttendanceStatus
    timestamp: datetime
    notes: Optional[str] = None
    class_name: Optional[str] = None


@dataclass(frozen=True)
class AbsenceNotice:
    """Read-model for the notifications page (record joined with student and class)."""

    record_id: str
    timestamp: datetime
    first_name: str
    last_name: str
    student_number: str
    class_name: Optional[str] = None


@dataclass(frozen=True)
class ScanResult:
    outcome: ScanOutcome
    student: Optional[Student] = None
    record_id: Optional[str] = None
    cause: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == ScanOutcome.RECORDED
