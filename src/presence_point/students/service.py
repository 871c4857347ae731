from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_text, require_non_empty
from ..core.constants import PROFILE_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..stats import aggregator
from ..teachers.model import Teacher
from .model import Student
from .repository import StudentRepository


@dataclass(frozen=True)
class StudentProfile:
    student: Student
    records: Sequence[AttendanceRecord]
    total: int
    present: int
    absent: int
    rate: float


class StudentService:
    """Use case: manage the students of the teacher's school."""

    def __init__(self, students: StudentRepository, attendance: AttendanceRepository):
        self._students = students
        self._attendance = attendance

    def list_for_teacher(self, teacher: Teacher) -> Sequence[Student]:
        if not teacher.school_id:
            return []
        return self._students.list_for_school(teacher.school_id)

    def add_student(
        self,
        *,
        teacher: Teacher,
        first_name: str,
        last_name: str,
        student_number: str,
        card_reader_id: Optional[str] = None,
    ) -> str:
        if not teacher.school_id:
            raise ValidationError("Du måste vara kopplad till en skola först")

        first_name = require_non_empty(first_name, "Förnamn")
        last_name = require_non_empty(last_name, "Efternamn")
        student_number = require_non_empty(student_number, "Elevnummer")
        card_reader_id = optional_text(card_reader_id)

        if card_reader_id and self._students.get_by_card_reader_id(card_reader_id):
            raise ValidationError("Kort-ID används redan av en annan elev")

        return self._students.create(
            school_id=teacher.school_id,
            first_name=first_name,
            last_name=last_name,
            student_number=student_number,
            card_reader_id=card_reader_id,
        )

    def delete_student(self, *, teacher: Teacher, student_id: str) -> None:
        self.get_for_teacher(teacher, student_id)
        if not self._students.delete_by_id(student_id):
            raise ValidationError("Kunde inte ta bort elev")

    def get_for_teacher(self, teacher: Teacher, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Eleven finns inte")
        if student.school_id != teacher.school_id:
            raise AuthorizationError("Eleven tillhör inte din skola")
        return student

    def profile(self, *, teacher: Teacher, student_id: str, limit: int = PROFILE_HISTORY_LIMIT) -> StudentProfile:
        student = self.get_for_teacher(teacher, student_id)
        records = list(self._attendance.list_recent_for_student(student_id, limit))
        statuses = [r.status for r in records]
        present = aggregator.count_status(statuses, AttendanceStatus.PRESENT)
        return StudentProfile(
            student=student,
            records=records,
            total=len(records),
            present=present,
            absent=aggregator.count_status(statuses, AttendanceStatus.ABSENT),
            rate=aggregator.weekly_rate(present, len(records)),
        )
