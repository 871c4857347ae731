from datetime import timedelta

from presence_point.classes.service import ClassService
from presence_point.core.enums import AttendanceStatus
from presence_point.stats.service import StatsService
from presence_point.teachers.model import Teacher

from conftest import InMemoryClasses


def _stats(attendance, students, links=()):
    return StatsService(attendance, students, ClassService(InMemoryClasses(links=links)))


def test_dashboard_counts_today_and_window(teacher, students, attendance, fixed_now):
    attendance.create(student_id="s1", lesson_id=None, status=AttendanceStatus.PRESENT, timestamp=fixed_now)
    attendance.create(student_id="s2", lesson_id=None, status=AttendanceStatus.ABSENT, timestamp=fixed_now)
    attendance.create(
        student_id="s1", lesson_id=None, status=AttendanceStatus.PRESENT, timestamp=fixed_now - timedelta(days=2)
    )
    # Other school, must not count.
    attendance.create(student_id="s3", lesson_id=None, status=AttendanceStatus.PRESENT, timestamp=fixed_now)

    stats = _stats(attendance, students, links=[("t1", "c1"), ("t1", "c2")]).dashboard(teacher, now=fixed_now)

    assert stats.student_count == 2
    assert stats.class_count == 2
    assert stats.present_today == 1
    assert stats.absent_today == 1
    assert stats.daily_rate == 50.0
    assert stats.week_present == 2
    assert stats.week_total == 3
    assert round(stats.weekly_rate, 2) == 66.67


def test_dashboard_without_school_is_zero(students, attendance, fixed_now):
    stats = _stats(attendance, students).dashboard(Teacher(teacher_id="t9", user_id="u9"), now=fixed_now)

    assert stats.student_count == 0
    assert stats.daily_rate == 0.0
    assert stats.weekly_rate == 0.0
