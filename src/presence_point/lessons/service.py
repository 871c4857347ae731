from __future__ import annotations

from typing import Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.validators import require_clock, require_non_empty
from ..core.constants import FIRST_SLOT_HOUR, SLOT_COUNT, WEEKDAYS
from ..core.exceptions import AuthorizationError, ValidationError
from ..teachers.model import Teacher
from .model import Lesson, ScheduleSlot, WeeklyGrid
from .repository import LessonRepository


class LessonService:
    """Use case: edit the weekly lesson schedule of a teacher's classes."""

    def __init__(self, lessons: LessonRepository, classes: ClassRepository):
        self._lessons = lessons
        self._classes = classes

    def list_for_teacher(self, teacher: Teacher) -> Sequence[Lesson]:
        class_ids = self._classes.class_ids_for_teacher(teacher.teacher_id)
        return self._lessons.list_for_classes(class_ids)

    def weekly_grid(self, teacher: Teacher) -> WeeklyGrid:
        """Hourly grid (08:00-17:00, Monday-Friday); a lesson sits in the slot of its start hour."""

        lessons = self.list_for_teacher(teacher)
        slots = []
        for i in range(SLOT_COUNT):
            hour = FIRST_SLOT_HOUR + i
            cells: list[Optional[Lesson]] = []
            for day in range(1, len(WEEKDAYS) + 1):
                cells.append(
                    next((x for x in lessons if x.day_of_week == day and x.start_time.hour == hour), None)
                )
            slots.append(ScheduleSlot(label=f"{hour}:00", cells=cells))
        return WeeklyGrid(days=list(WEEKDAYS), slots=slots)

    def save_lesson(
        self,
        *,
        teacher: Teacher,
        class_id: str,
        day_of_week: str,
        start_time: str,
        end_time: str,
        room: str,
        lesson_id: Optional[str] = None,
    ) -> str:
        if not all(v and str(v).strip() for v in (class_id, day_of_week, start_time, end_time, room)):
            raise ValidationError("Alla fält måste fyllas i")

        try:
            day = int(day_of_week)
        except (TypeError, ValueError):
            raise ValidationError("Ogiltig dag")
        if not 1 <= day <= len(WEEKDAYS):
            raise ValidationError("Ogiltig dag")

        start = require_clock(start_time, "Starttid")
        end = require_clock(end_time, "Sluttid")
        if end <= start:
            raise ValidationError("Sluttid måste vara efter starttid")
        room = require_non_empty(room, "Sal")

        self._require_own_class(teacher, class_id)

        if lesson_id:
            existing = self._lessons.get_by_id(lesson_id)
            if not existing:
                raise ValidationError("Lektionen finns inte")
            self._require_own_class(teacher, existing.class_id)
            if not self._lessons.update(
                lesson_id=lesson_id,
                class_id=class_id,
                day_of_week=day,
                start_time=start,
                end_time=end,
                room=room,
            ):
                raise ValidationError("Kunde inte spara lektion")
            return lesson_id

        return self._lessons.create(class_id=class_id, day_of_week=day, start_time=start, end_time=end, room=room)

    def delete_lesson(self, *, teacher: Teacher, lesson_id: str) -> None:
        lesson = self._lessons.get_by_id(lesson_id)
        if not lesson:
            raise ValidationError("Lektionen finns inte")
        self._require_own_class(teacher, lesson.class_id)
        if not self._lessons.delete(lesson_id):
            raise ValidationError("Kunde inte ta bort lektion")

    def _require_own_class(self, teacher: Teacher, class_id: str) -> None:
        if class_id not in set(self._classes.class_ids_for_teacher(teacher.teacher_id)):
            raise AuthorizationError("Du undervisar inte den här klassen")
