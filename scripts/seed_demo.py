"""Add demo students with card ids to one school.

Usage: python scripts/seed_demo.py <school_id>
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from dotenv import load_dotenv

from presence_point.config import get_settings_module
from presence_point.container import build_container

DEMO_STUDENTS = [
    ("Ada", "Berg", "1001", "CARD42"),
    ("Bo", "Ek", "1002", "CARD43"),
    ("Cy", "Alm", "1003", "CARD44"),
]


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit(__doc__)
    school_id = sys.argv[1]

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(supabase_config=settings.SUPABASE_CONFIG, realtime=False)
    students = container.students_repo

    added = 0
    for first_name, last_name, number, card in DEMO_STUDENTS:
        if students.get_by_card_reader_id(card):
            continue
        students.create(
            school_id=school_id,
            first_name=first_name,
            last_name=last_name,
            student_number=number,
            card_reader_id=card,
        )
        added += 1

    print(f"OK: Seeded {added} demo student(s) -> school {school_id} ({settings.SUPABASE_CONFIG.get('url')})")


if __name__ == "__main__":
    main()
