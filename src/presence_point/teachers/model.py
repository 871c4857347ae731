from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Domain entity linked 1:1 to an authenticated user."""

    teacher_id: str
    user_id: str
    school_id: Optional[str] = None
    schedule_url: Optional[str] = None


@dataclass(frozen=True)
class School:
    school_id: str
    name: str
