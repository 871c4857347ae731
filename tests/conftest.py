from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest

from presence_point.attendance.model import AbsenceNotice, AttendanceRecord
from presence_point.auth.model import AuthSession
from presence_point.classes.model import SchoolClass
from presence_point.core.enums import AttendanceStatus
from presence_point.core.exceptions import AuthenticationError, StorageError
from presence_point.lessons.model import Lesson
from presence_point.students.model import Student
from presence_point.teachers.model import School, Teacher


class InMemoryStudents:
    def __init__(self, students=()):
        self.by_id: Dict[str, Student] = {s.student_id: s for s in students}
        self.broken_cards: set = set()
        self._id = 0

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return self.by_id.get(student_id)

    def get_by_card_reader_id(self, card_reader_id: str) -> Optional[Student]:
        if card_reader_id in self.broken_cards:
            raise StorageError("card lookup timed out")
        return next((s for s in self.by_id.values() if s.card_reader_id == card_reader_id), None)

    def list_for_school(self, school_id: str):
        items = [s for s in self.by_id.values() if s.school_id == school_id]
        return sorted(items, key=lambda s: s.last_name)

    def count_for_school(self, school_id: str) -> int:
        return len(self.list_for_school(school_id))

    def create(self, *, school_id, first_name, last_name, student_number, card_reader_id=None) -> str:
        self._id += 1
        student_id = f"s-new-{self._id}"
        self.by_id[student_id] = Student(
            student_id=student_id,
            first_name=first_name,
            last_name=last_name,
            student_number=student_number,
            card_reader_id=card_reader_id,
            school_id=school_id,
        )
        return student_id

    def delete_by_id(self, student_id: str) -> bool:
        return self.by_id.pop(student_id, None) is not None


class InMemoryAttendance:
    def __init__(self, students: Optional[InMemoryStudents] = None):
        self.records: List[AttendanceRecord] = []
        self.students = students
        self.fail_with: Optional[StorageError] = None
        self.fail_reads_with: Optional[StorageError] = None
        self._id = 0

    def list_for_student_between(self, *, student_id, start, end):
        if self.fail_reads_with:
            raise self.fail_reads_with
        return [r for r in self.records if r.student_id == student_id and start <= r.timestamp < end]

    def list_statuses_between(self, *, start, end, school_id):
        def in_school(student_id):
            student = self.students.get_by_id(student_id) if self.students else None
            return student is not None and student.school_id == school_id

        return [r.status for r in self.records if start <= r.timestamp < end and in_school(r.student_id)]

    def list_recent_for_student(self, student_id, limit):
        items = [r for r in self.records if r.student_id == student_id]
        items.sort(key=lambda r: r.timestamp, reverse=True)
        return items[:limit]

    def list_absences_since(self, *, since, limit):
        out = []
        for r in sorted(self.records, key=lambda r: r.timestamp, reverse=True):
            if r.status != AttendanceStatus.ABSENT or r.timestamp < since:
                continue
            student = self.students.get_by_id(r.student_id) if self.students else None
            out.append(
                AbsenceNotice(
                    record_id=r.record_id,
                    timestamp=r.timestamp,
                    first_name=student.first_name if student else "",
                    last_name=student.last_name if student else "",
                    student_number=student.student_number if student else "",
                )
            )
        return out[:limit]

    def create(self, *, student_id, lesson_id, status, timestamp, notes=None) -> str:
        if self.fail_with:
            raise self.fail_with
        self._id += 1
        record_id = f"r{self._id}"
        self.records.append(
            AttendanceRecord(
                record_id=record_id,
                student_id=student_id,
                lesson_id=lesson_id,
                status=status,
                timestamp=timestamp,
                notes=notes,
            )
        )
        return record_id


class InMemoryTeachers:
    def __init__(self, teachers=(), schools=()):
        self.by_id: Dict[str, Teacher] = {t.teacher_id: t for t in teachers}
        self.schools: List[School] = list(schools)
        self._id = 0

    def get_by_id(self, teacher_id):
        return self.by_id.get(teacher_id)

    def get_by_user_id(self, user_id):
        return next((t for t in self.by_id.values() if t.user_id == user_id), None)

    def create_for_user(self, user_id):
        self._id += 1
        teacher = Teacher(teacher_id=f"t-new-{self._id}", user_id=user_id)
        self.by_id[teacher.teacher_id] = teacher
        return teacher

    def update_settings(self, *, teacher_id, school_id, schedule_url) -> bool:
        teacher = self.by_id.get(teacher_id)
        if not teacher:
            return False
        self.by_id[teacher_id] = replace(teacher, school_id=school_id, schedule_url=schedule_url)
        return True

    def list_schools(self):
        return sorted(self.schools, key=lambda s: s.name)


class InMemoryClasses:
    def __init__(self, classes=(), links=()):
        self.by_id: Dict[str, SchoolClass] = {c.class_id: c for c in classes}
        self.links: List[tuple] = list(links)
        self.fail_link = False
        self._id = 0

    def class_ids_for_teacher(self, teacher_id):
        return [class_id for t, class_id in self.links if t == teacher_id]

    def list_by_ids(self, class_ids):
        items = [self.by_id[i] for i in class_ids if i in self.by_id]
        return sorted(items, key=lambda c: c.name)

    def create(self, *, name, school_id):
        self._id += 1
        class_id = f"c-new-{self._id}"
        self.by_id[class_id] = SchoolClass(class_id=class_id, name=name, school_id=school_id)
        return class_id

    def link_teacher(self, *, teacher_id, class_id):
        if self.fail_link:
            raise StorageError("insert teacher_classes failed")
        self.links.append((teacher_id, class_id))

    def delete(self, class_id):
        return self.by_id.pop(class_id, None) is not None


class InMemoryLessons:
    def __init__(self, classes: InMemoryClasses, lessons=()):
        self.classes = classes
        self.by_id: Dict[str, Lesson] = {x.lesson_id: x for x in lessons}
        self._id = 0

    def get_by_id(self, lesson_id):
        return self.by_id.get(lesson_id)

    def list_for_classes(self, class_ids):
        items = [x for x in self.by_id.values() if x.class_id in set(class_ids)]
        return sorted(items, key=lambda x: (x.day_of_week, x.start_time))

    def create(self, *, class_id, day_of_week, start_time, end_time, room):
        self._id += 1
        lesson_id = f"l-new-{self._id}"
        self.by_id[lesson_id] = Lesson(
            lesson_id=lesson_id,
            class_id=class_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            room=room,
            class_name=self.classes.by_id[class_id].name,
        )
        return lesson_id

    def update(self, *, lesson_id, class_id, day_of_week, start_time, end_time, room):
        if lesson_id not in self.by_id:
            return False
        self.by_id[lesson_id] = replace(
            self.by_id[lesson_id],
            class_id=class_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            room=room,
        )
        return True

    def delete(self, lesson_id):
        return self.by_id.pop(lesson_id, None) is not None


@dataclass
class FakeAuthGateway:
    accounts: Dict[str, str] = field(default_factory=dict)
    confirm_email: bool = False
    signed_out: List[str] = field(default_factory=list)

    def sign_up(self, email, password):
        if email in self.accounts:
            raise AuthenticationError("Kontot finns redan")
        self.accounts[email] = password
        token = None if self.confirm_email else f"token-{email}"
        return AuthSession(user_id=f"u-{email}", email=email, access_token=token)

    def sign_in(self, email, password):
        if self.accounts.get(email) != password:
            raise AuthenticationError("Fel e-post eller lösenord")
        return AuthSession(user_id=f"u-{email}", email=email, access_token=f"token-{email}")

    def sign_out(self, access_token):
        self.signed_out.append(access_token)


class FakeSubscription:
    def __init__(self):
        self.released = False

    def release(self):
        self.released = True


class FakeChangeFeed:
    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.callback: Optional[Callable[[Dict[str, Any]], None]] = None
        self.subscription = FakeSubscription()

    def subscribe_inserts(self, *, channel, table, row_filter, callback):
        self.calls.append({"channel": channel, "table": table, "row_filter": row_filter})
        self.callback = callback
        return self.subscription


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 12, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def school():
    return School(school_id="sch-1", name="Norra skolan")


@pytest.fixture
def teacher(school):
    return Teacher(teacher_id="t1", user_id="u-anna@example.com", school_id=school.school_id)


@pytest.fixture
def students(school):
    return InMemoryStudents(
        [
            Student("s1", "Ada", "Berg", "1001", card_reader_id="CARD42", school_id=school.school_id),
            Student("s2", "Bo", "Ek", "1002", card_reader_id="CARD7", school_id=school.school_id),
            Student("s3", "Cy", "Alm", "2001", card_reader_id=None, school_id="sch-2"),
        ]
    )


@pytest.fixture
def attendance(students):
    return InMemoryAttendance(students)
