from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for students.

    Note (DIP): services depend on this interface, never on the Supabase client.
    """

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_card_reader_id(self, card_reader_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_for_school(self, school_id: str) -> Sequence[Student]:
        """Students of a school ordered by last name."""

        raise NotImplementedError

    def count_for_school(self, school_id: str) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        school_id: str,
        first_name: str,
        last_name: str,
        student_number: str,
        card_reader_id: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> bool:
        raise NotImplementedError
