from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..common.datetime_utils import parse_clock
from ..database.connection import SupabaseConnection
from ..database.supabase_base import backend_call, first, rows
from .model import Lesson
from .repository import LessonRepository

_SELECT = "*, classes(name)"


def _to_lesson(r: dict) -> Lesson:
    joined = r.get("classes") or {}
    return Lesson(
        lesson_id=str(r["id"]),
        class_id=str(r["class_id"]),
        day_of_week=int(r["day_of_week"]),
        start_time=parse_clock(r["start_time"]),
        end_time=parse_clock(r["end_time"]),
        room=r.get("room") or "",
        class_name=joined.get("name"),
    )


def _payload(*, class_id: str, day_of_week: int, start_time: time, end_time: time, room: str) -> dict:
    return {
        "class_id": class_id,
        "day_of_week": int(day_of_week),
        "start_time": start_time.strftime("%H:%M"),
        "end_time": end_time.strftime("%H:%M"),
        "room": room,
    }


class SupabaseLessonRepository(LessonRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_by_id(self, lesson_id: str) -> Optional[Lesson]:
        with backend_call("select lessons"):
            resp = self._conn.client().table("lessons").select(_SELECT).eq("id", lesson_id).limit(1).execute()
        r = first(resp)
        return _to_lesson(r) if r else None

    def list_for_classes(self, class_ids: Sequence[str]) -> Sequence[Lesson]:
        if not class_ids:
            return []
        with backend_call("list lessons"):
            resp = (
                self._conn.client()
                .table("lessons")
                .select(_SELECT)
                .in_("class_id", list(class_ids))
                .order("day_of_week")
                .order("start_time")
                .execute()
            )
        return [_to_lesson(r) for r in rows(resp)]

    def create(self, *, class_id: str, day_of_week: int, start_time: time, end_time: time, room: str) -> str:
        data = _payload(class_id=class_id, day_of_week=day_of_week, start_time=start_time, end_time=end_time, room=room)
        with backend_call("insert lessons"):
            resp = self._conn.client().table("lessons").insert(data).execute()
        return str(first(resp)["id"])

    def update(
        self,
        *,
        lesson_id: str,
        class_id: str,
        day_of_week: int,
        start_time: time,
        end_time: time,
        room: str,
    ) -> bool:
        data = _payload(class_id=class_id, day_of_week=day_of_week, start_time=start_time, end_time=end_time, room=room)
        with backend_call("update lessons"):
            resp = self._conn.client().table("lessons").update(data).eq("id", lesson_id).execute()
        return bool(rows(resp))

    def delete(self, lesson_id: str) -> bool:
        with backend_call("delete lessons"):
            resp = self._conn.client().table("lessons").delete().eq("id", lesson_id).execute()
        return bool(rows(resp))
