from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import backend_call, first, rows
from .model import SchoolClass
from .repository import ClassRepository


class SupabaseClassRepository(ClassRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def class_ids_for_teacher(self, teacher_id: str) -> Sequence[str]:
        with backend_call("select teacher_classes"):
            resp = self._conn.client().table("teacher_classes").select("class_id").eq("teacher_id", teacher_id).execute()
        return [str(r["class_id"]) for r in rows(resp)]

    def list_by_ids(self, class_ids: Sequence[str]) -> Sequence[SchoolClass]:
        if not class_ids:
            return []
        with backend_call("list classes"):
            resp = self._conn.client().table("classes").select("*").in_("id", list(class_ids)).order("name").execute()
        return [
            SchoolClass(class_id=str(r["id"]), name=r["name"], school_id=r.get("school_id"))
            for r in rows(resp)
        ]

    def create(self, *, name: str, school_id: Optional[str]) -> str:
        with backend_call("insert classes"):
            resp = self._conn.client().table("classes").insert({"name": name, "school_id": school_id}).execute()
        return str(first(resp)["id"])

    def link_teacher(self, *, teacher_id: str, class_id: str) -> None:
        with backend_call("insert teacher_classes"):
            self._conn.client().table("teacher_classes").insert({"teacher_id": teacher_id, "class_id": class_id}).execute()

    def delete(self, class_id: str) -> bool:
        with backend_call("delete classes"):
            resp = self._conn.client().table("classes").delete().eq("id", class_id).execute()
        return bool(rows(resp))
