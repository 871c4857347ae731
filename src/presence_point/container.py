from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.lesson_resolver import PlaceholderLessonResolver
from .attendance.recorder import AttendanceRecorder
from .attendance.repository import AttendanceRepository
from .attendance.supabase_attendance_repository import SupabaseAttendanceRepository
from .auth.gateway import AuthGateway
from .auth.service import AuthService
from .auth.supabase_auth_gateway import SupabaseAuthGateway
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .classes.supabase_class_repository import SupabaseClassRepository
from .core.constants import PLACEHOLDER_LESSON_ID, SCAN_GAP_MS
from .database.connection import SupabaseConfig, SupabaseConnection
from .lessons.repository import LessonRepository
from .lessons.service import LessonService
from .lessons.supabase_lesson_repository import SupabaseLessonRepository
from .notifications.board import NoticeBoard
from .notifications.change_feed import ChangeFeed
from .notifications.service import AbsenceFeed
from .notifications.supabase_change_feed import SupabaseChangeFeed
from .scanning.service import ScanService
from .scanning.sessions import ScanSessionRegistry
from .stats.service import StatsService
from .students.repository import StudentRepository
from .students.service import StudentService
from .students.supabase_student_repository import SupabaseStudentRepository
from .teachers.repository import TeacherRepository
from .teachers.service import TeacherService
from .teachers.supabase_teacher_repository import SupabaseTeacherRepository


@dataclass(frozen=True)
class Container:
    students_repo: StudentRepository
    teachers_repo: TeacherRepository
    classes_repo: ClassRepository
    lessons_repo: LessonRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    teacher_service: TeacherService
    student_service: StudentService
    class_service: ClassService
    lesson_service: LessonService
    recorder: AttendanceRecorder
    scan_service: ScanService
    stats_service: StatsService
    absence_feed: AbsenceFeed


def wire_container(
    *,
    students_repo: StudentRepository,
    teachers_repo: TeacherRepository,
    classes_repo: ClassRepository,
    lessons_repo: LessonRepository,
    attendance_repo: AttendanceRepository,
    auth_gateway: AuthGateway,
    change_feed: Optional[ChangeFeed] = None,
    scan_gap_ms: int = SCAN_GAP_MS,
    placeholder_lesson_id: Optional[str] = PLACEHOLDER_LESSON_ID,
) -> Container:
    """Build services on top of any repository implementation (Supabase or in-memory)."""

    teacher_service = TeacherService(teachers_repo)
    class_service = ClassService(classes_repo)
    recorder = AttendanceRecorder(
        attendance_repo,
        students_repo,
        lesson_resolver=PlaceholderLessonResolver(placeholder_lesson_id),
    )

    return Container(
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        classes_repo=classes_repo,
        lessons_repo=lessons_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(auth_gateway, teacher_service),
        teacher_service=teacher_service,
        student_service=StudentService(students_repo, attendance_repo),
        class_service=class_service,
        lesson_service=LessonService(lessons_repo, classes_repo),
        recorder=recorder,
        scan_service=ScanService(ScanSessionRegistry(gap_ms=scan_gap_ms), recorder),
        stats_service=StatsService(attendance_repo, students_repo, class_service),
        absence_feed=AbsenceFeed(attendance_repo, NoticeBoard(), change_feed),
    )


def build_container(
    *,
    supabase_config: dict,
    scan_gap_ms: int = SCAN_GAP_MS,
    placeholder_lesson_id: Optional[str] = PLACEHOLDER_LESSON_ID,
    realtime: bool = True,
) -> Container:
    config = SupabaseConfig(url=str(supabase_config["url"]), key=str(supabase_config["key"]))
    conn = SupabaseConnection.get_instance(config)

    return wire_container(
        students_repo=SupabaseStudentRepository(conn),
        teachers_repo=SupabaseTeacherRepository(conn),
        classes_repo=SupabaseClassRepository(conn),
        lessons_repo=SupabaseLessonRepository(conn),
        attendance_repo=SupabaseAttendanceRepository(conn),
        auth_gateway=SupabaseAuthGateway(config),
        change_feed=SupabaseChangeFeed(config) if realtime else None,
        scan_gap_ms=scan_gap_ms,
        placeholder_lesson_id=placeholder_lesson_id,
    )
