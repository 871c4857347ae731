from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.validators import optional_text, require_http_url
from ..core.exceptions import ValidationError
from .model import School, Teacher
from .repository import TeacherRepository


@dataclass(frozen=True)
class TeacherSettings:
    teacher: Teacher
    schools: Sequence[School]


class TeacherService:
    """Use case: teacher profile (school affiliation, schedule link)."""

    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def get_or_create(self, user_id: str) -> Teacher:
        teacher = self._teachers.get_by_user_id(user_id)
        if teacher:
            return teacher
        return self._teachers.create_for_user(user_id)

    def get(self, teacher_id: str) -> Teacher:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise ValidationError("Lärarprofilen finns inte")
        return teacher

    def get_settings(self, teacher_id: str) -> TeacherSettings:
        return TeacherSettings(teacher=self.get(teacher_id), schools=self._teachers.list_schools())

    def update_settings(self, *, teacher_id: str, school_id: Optional[str], schedule_url: Optional[str]) -> None:
        school_id = optional_text(school_id)
        schedule_url = optional_text(schedule_url)

        # The schedule link is stored as-is; it is only checked to be a URL.
        if schedule_url:
            require_http_url(schedule_url, "Schema-länk")

        if school_id and school_id not in {s.school_id for s in self._teachers.list_schools()}:
            raise ValidationError("Okänd skola")

        if not self._teachers.update_settings(teacher_id=teacher_id, school_id=school_id, schedule_url=schedule_url):
            raise ValidationError("Kunde inte spara inställningar")
