from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import backend_call, first, rows
from .model import School, Teacher
from .repository import TeacherRepository

_COLUMNS = "id, user_id, school_id, skola24_schedule_url"


def _to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=str(r["id"]),
        user_id=str(r["user_id"]),
        school_id=r.get("school_id"),
        schedule_url=r.get("skola24_schedule_url"),
    )


class SupabaseTeacherRepository(TeacherRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        with backend_call("select teachers"):
            resp = self._conn.client().table("teachers").select(_COLUMNS).eq("id", teacher_id).limit(1).execute()
        r = first(resp)
        return _to_teacher(r) if r else None

    def get_by_user_id(self, user_id: str) -> Optional[Teacher]:
        with backend_call("select teachers by user"):
            resp = self._conn.client().table("teachers").select(_COLUMNS).eq("user_id", user_id).limit(1).execute()
        r = first(resp)
        return _to_teacher(r) if r else None

    def create_for_user(self, user_id: str) -> Teacher:
        with backend_call("insert teachers"):
            resp = self._conn.client().table("teachers").insert({"user_id": user_id}).execute()
        return _to_teacher(first(resp))

    def update_settings(self, *, teacher_id: str, school_id: Optional[str], schedule_url: Optional[str]) -> bool:
        with backend_call("update teachers"):
            resp = (
                self._conn.client()
                .table("teachers")
                .update({"school_id": school_id, "skola24_schedule_url": schedule_url})
                .eq("id", teacher_id)
                .execute()
            )
        return bool(rows(resp))

    def list_schools(self) -> Sequence[School]:
        with backend_call("list schools"):
            resp = self._conn.client().table("schools").select("id, name").order("name").execute()
        return [School(school_id=str(r["id"]), name=r["name"]) for r in rows(resp)]
