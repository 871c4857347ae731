from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student, optionally bound to an NFC card.

    Note: ``card_reader_id`` is what a scanned token is matched against.
    """

    student_id: str
    first_name: str
    last_name: str
    student_number: str
    card_reader_id: Optional[str] = None
    school_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
