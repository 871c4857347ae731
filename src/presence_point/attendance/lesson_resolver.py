from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.constants import PLACEHOLDER_LESSON_ID
from ..students.model import Student


class LessonResolver(Protocol):
    """Decides which lesson a scan belongs to."""

    def resolve(self, *, student: Student, now: datetime) -> Optional[str]:
        raise NotImplementedError


class PlaceholderLessonResolver(LessonResolver):
    """Always answers with one fixed lesson reference.

    Matching a scan to the lesson running at scan time is not implemented;
    swap in another resolver to add it.
    """

    def __init__(self, lesson_id: Optional[str] = PLACEHOLDER_LESSON_ID):
        self._lesson_id = lesson_id

    def resolve(self, *, student: Student, now: datetime) -> Optional[str]:
        return self._lesson_id
