from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import day_window, now_local
from ..core.constants import SCAN_NOTE, UNIQUE_VIOLATION
from ..core.enums import AttendanceStatus, ScanOutcome
from ..core.exceptions import StorageError, ValidationError
from ..scanning.model import CardToken
from ..students.model import Student
from ..students.repository import StudentRepository
from .lesson_resolver import LessonResolver, PlaceholderLessonResolver
from .model import ScanResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceRecorder:
    """Turns a card token or a manual mark into at most one record per student and day.

    The duplicate check is a read followed by an insert, so two terminals
    scanning the same card at the same moment can both pass it. When the store
    has a unique index on (student, day) the losing insert is reported as
    ALREADY_MARKED.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        lesson_resolver: Optional[LessonResolver] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._lessons = lesson_resolver or PlaceholderLessonResolver()
        self._clock = clock

    def record_scan(
        self,
        token: CardToken,
        *,
        school_id: Optional[str],
        now: Optional[datetime] = None,
    ) -> ScanResult:
        """Record a card scanned at a terminal of ``school_id``.

        Cards of students from another school (or any card, when the teacher
        has no school) count as unknown. Backend failures come back as
        WRITE_FAILED so one bad card never hides the results of the others.
        """

        now = now or self._clock()

        try:
            student = self._students.get_by_card_reader_id(token.value)
        except StorageError as exc:
            logger.error("Card lookup failed for %r: %s", token.value, exc)
            return ScanResult(outcome=ScanOutcome.WRITE_FAILED, cause=str(exc))

        if not student or not school_id or student.school_id != school_id:
            logger.info("Scan rejected: unknown card %r", token.value)
            return ScanResult(outcome=ScanOutcome.UNKNOWN_CARD)

        lesson_id = self._lessons.resolve(student=student, now=now)
        return self._record(student, AttendanceStatus.PRESENT, lesson_id=lesson_id, notes=SCAN_NOTE, now=now)

    def record_manual(
        self,
        student_id: str,
        status: AttendanceStatus,
        *,
        lesson_id: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ScanResult:
        now = now or self._clock()

        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Eleven finns inte")

        if lesson_id is None:
            lesson_id = self._lessons.resolve(student=student, now=now)
        return self._record(student, status, lesson_id=lesson_id, notes=notes, now=now)

    def _record(
        self,
        student: Student,
        status: AttendanceStatus,
        *,
        lesson_id: Optional[str],
        notes: Optional[str],
        now: datetime,
    ) -> ScanResult:
        start, end = day_window(now)
        try:
            existing = self._attendance.list_for_student_between(student_id=student.student_id, start=start, end=end)
        except StorageError as exc:
            logger.error("Duplicate check failed for student %s: %s", student.student_id, exc)
            return ScanResult(outcome=ScanOutcome.WRITE_FAILED, student=student, cause=str(exc))
        if existing:
            logger.info("Student %s already marked for %s", student.student_id, start.date())
            return ScanResult(outcome=ScanOutcome.ALREADY_MARKED, student=student)

        try:
            record_id = self._attendance.create(
                student_id=student.student_id,
                lesson_id=lesson_id,
                status=status,
                timestamp=now,
                notes=notes,
            )
        except StorageError as exc:
            if exc.code == UNIQUE_VIOLATION:
                logger.info("Concurrent mark for student %s lost the insert race", student.student_id)
                return ScanResult(outcome=ScanOutcome.ALREADY_MARKED, student=student)
            logger.error("Attendance insert failed for student %s: %s", student.student_id, exc)
            return ScanResult(outcome=ScanOutcome.WRITE_FAILED, student=student, cause=str(exc))

        logger.info("Recorded %s for student %s", status.value, student.student_id)
        return ScanResult(outcome=ScanOutcome.RECORDED, student=student, record_id=record_id)
