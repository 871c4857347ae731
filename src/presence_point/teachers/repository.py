from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import School, Teacher


class TeacherRepository(Protocol):
    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create_for_user(self, user_id: str) -> Teacher:
        raise NotImplementedError

    def update_settings(self, *, teacher_id: str, school_id: Optional[str], schedule_url: Optional[str]) -> bool:
        raise NotImplementedError

    def list_schools(self) -> Sequence[School]:
        """All schools ordered by name."""

        raise NotImplementedError
