from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def class_ids_for_teacher(self, teacher_id: str) -> Sequence[str]:
        """Class ids from the teacher_classes join table."""

        raise NotImplementedError

    def list_by_ids(self, class_ids: Sequence[str]) -> Sequence[SchoolClass]:
        """Classes ordered by name."""

        raise NotImplementedError

    def create(self, *, name: str, school_id: Optional[str]) -> str:
        raise NotImplementedError

    def link_teacher(self, *, teacher_id: str, class_id: str) -> None:
        raise NotImplementedError

    def delete(self, class_id: str) -> bool:
        raise NotImplementedError
