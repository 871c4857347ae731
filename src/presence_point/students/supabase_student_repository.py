from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import backend_call, count, first, rows
from .model import Student
from .repository import StudentRepository

_TABLE = "students"


def _to_student(r: dict) -> Student:
    return Student(
        student_id=str(r["id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        student_number=r["student_number"],
        card_reader_id=r.get("card_reader_id"),
        school_id=r.get("school_id"),
    )


class SupabaseStudentRepository(StudentRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with backend_call("select students"):
            resp = self._conn.client().table(_TABLE).select("*").eq("id", student_id).limit(1).execute()
        r = first(resp)
        return _to_student(r) if r else None

    def get_by_card_reader_id(self, card_reader_id: str) -> Optional[Student]:
        with backend_call("select students by card"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("*")
                .eq("card_reader_id", card_reader_id)
                .limit(1)
                .execute()
            )
        r = first(resp)
        return _to_student(r) if r else None

    def list_for_school(self, school_id: str) -> Sequence[Student]:
        with backend_call("list students"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("*")
                .eq("school_id", school_id)
                .order("last_name")
                .execute()
            )
        return [_to_student(r) for r in rows(resp)]

    def count_for_school(self, school_id: str) -> int:
        with backend_call("count students"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("id", count="exact", head=True)
                .eq("school_id", school_id)
                .execute()
            )
        return count(resp)

    def create(
        self,
        *,
        school_id: str,
        first_name: str,
        last_name: str,
        student_number: str,
        card_reader_id: Optional[str] = None,
    ) -> str:
        with backend_call("insert students"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .insert(
                    {
                        "school_id": school_id,
                        "first_name": first_name,
                        "last_name": last_name,
                        "student_number": student_number,
                        "card_reader_id": card_reader_id,
                    }
                )
                .execute()
            )
        return str(first(resp)["id"])

    def delete_by_id(self, student_id: str) -> bool:
        with backend_call("delete students"):
            resp = self._conn.client().table(_TABLE).delete().eq("id", student_id).execute()
        return bool(rows(resp))
