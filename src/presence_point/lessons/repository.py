from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import Lesson


class LessonRepository(Protocol):
    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        raise NotImplementedError

    def list_for_classes(self, class_ids: Sequence[str]) -> Sequence[Lesson]:
        """Lessons joined with their class name, ordered by day then start time."""

        raise NotImplementedError

    def create(self, *, class_id: str, day_of_week: int, start_time: time, end_time: time, room: str) -> str:
        raise NotImplementedError

    def update(
        self,
        *,
        lesson_id: str,
        class_id: str,
        day_of_week: int,
        start_time: time,
        end_time: time,
        room: str,
    ) -> bool:
        raise NotImplementedError

    def delete(self, lesson_id: str) -> bool:
        raise NotImplementedError
