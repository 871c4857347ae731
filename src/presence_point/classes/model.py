from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    class_id: str
    name: str
    school_id: Optional[str] = None
