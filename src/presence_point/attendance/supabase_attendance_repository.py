from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import parse_timestamp
from ..core.enums import AttendanceStatus
from ..database.connection import SupabaseConnection
from ..database.supabase_base import backend_call, first, iso, rows
from .model import AbsenceNotice, AttendanceRecord
from .repository import AttendanceRepository

_TABLE = "attendance_records"


def _to_record(r: dict) -> AttendanceRecord:
    lesson = r.get("lessons") or {}
    return AttendanceRecord(
        record_id=str(r["id"]),
        student_id=str(r["student_id"]),
        lesson_id=r.get("lesson_id"),
        status=AttendanceStatus(r["status"]),
        timestamp=parse_timestamp(r["timestamp"]),
        notes=r.get("notes"),
        class_name=(lesson.get("classes") or {}).get("name"),
    )


class SupabaseAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def list_for_student_between(self, *, student_id: str, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        with backend_call("select attendance_records for day"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("*")
                .eq("student_id", student_id)
                .gte("timestamp", iso(start))
                .lt("timestamp", iso(end))
                .execute()
            )
        return [_to_record(r) for r in rows(resp)]

    def list_statuses_between(self, *, start: datetime, end: datetime, school_id: str) -> Sequence[AttendanceStatus]:
        with backend_call("select attendance_records statuses"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("status, students!inner(school_id)")
                .eq("students.school_id", school_id)
                .gte("timestamp", iso(start))
                .lt("timestamp", iso(end))
                .execute()
            )
        return [AttendanceStatus(r["status"]) for r in rows(resp)]

    def list_recent_for_student(self, student_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with backend_call("select attendance_records history"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("*, lessons(classes(name))")
                .eq("student_id", student_id)
                .order("timestamp", desc=True)
                .limit(int(limit))
                .execute()
            )
        return [_to_record(r) for r in rows(resp)]

    def list_absences_since(self, *, since: datetime, limit: int) -> Sequence[AbsenceNotice]:
        with backend_call("select absences"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .select("id, timestamp, students(first_name, last_name, student_number), lessons(classes(name))")
                .eq("status", AttendanceStatus.ABSENT.value)
                .gte("timestamp", iso(since))
                .order("timestamp", desc=True)
                .limit(int(limit))
                .execute()
            )
        out = []
        for r in rows(resp):
            student = r.get("students") or {}
            lesson = r.get("lessons") or {}
            out.append(
                AbsenceNotice(
                    record_id=str(r["id"]),
                    timestamp=parse_timestamp(r["timestamp"]),
                    first_name=student.get("first_name", ""),
                    last_name=student.get("last_name", ""),
                    student_number=student.get("student_number", ""),
                    class_name=(lesson.get("classes") or {}).get("name"),
                )
            )
        return out

    def create(
        self,
        *,
        student_id: str,
        lesson_id: Optional[str],
        status: AttendanceStatus,
        timestamp: datetime,
        notes: Optional[str] = None,
    ) -> str:
        with backend_call("insert attendance_records"):
            resp = (
                self._conn.client()
                .table(_TABLE)
                .insert(
                    {
                        "student_id": student_id,
                        "lesson_id": lesson_id,
                        "status": status.value,
                        "timestamp": iso(timestamp),
                        "notes": notes,
                    }
                )
                .execute()
            )
        return str(first(resp)["id"])
