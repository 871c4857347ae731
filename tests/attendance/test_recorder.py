from dataclasses import replace
from datetime import timedelta

import pytest

from presence_point.attendance.lesson_resolver import PlaceholderLessonResolver
from presence_point.attendance.recorder import AttendanceRecorder
from presence_point.core.constants import PLACEHOLDER_LESSON_ID, SCAN_NOTE, UNIQUE_VIOLATION
from presence_point.core.enums import AttendanceStatus, ScanOutcome
from presence_point.core.exceptions import StorageError, ValidationError
from presence_point.scanning.model import CardToken


def test_unknown_card_writes_nothing(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("NOPE"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.UNKNOWN_CARD
    assert result.student is None
    assert attendance.records == []


def test_scan_records_present_with_placeholder_lesson(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.RECORDED
    assert result.ok
    assert result.student.student_id == "s1"
    [record] = attendance.records
    assert record.record_id == result.record_id
    assert record.status is AttendanceStatus.PRESENT
    assert record.timestamp == fixed_now
    assert record.lesson_id == PLACEHOLDER_LESSON_ID
    assert record.notes == SCAN_NOTE


def test_second_scan_same_day_is_already_marked(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)
    recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now + timedelta(hours=3))

    assert result.outcome is ScanOutcome.ALREADY_MARKED
    assert result.student.student_id == "s1"
    assert len(attendance.records) == 1


def test_scan_next_day_records_again(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)
    recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now + timedelta(days=1))

    assert result.outcome is ScanOutcome.RECORDED
    assert len(attendance.records) == 2


def test_insert_failure_is_write_failed(students, attendance, fixed_now):
    attendance.fail_with = StorageError("connection reset")
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.WRITE_FAILED
    assert result.cause == "connection reset"
    assert not result.ok


def test_unique_violation_is_already_marked(students, attendance, fixed_now):
    attendance.fail_with = StorageError("duplicate key", code=UNIQUE_VIOLATION)
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.ALREADY_MARKED


def test_custom_lesson_resolver(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students, lesson_resolver=PlaceholderLessonResolver(None))

    recorder.record_scan(CardToken("CARD7"), school_id="sch-1", now=fixed_now)

    assert attendance.records[0].lesson_id is None


def test_manual_absent_mark(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_manual("s2", AttendanceStatus.ABSENT, notes="Sjuk", now=fixed_now)

    assert result.outcome is ScanOutcome.RECORDED
    assert attendance.records[0].status is AttendanceStatus.ABSENT
    assert attendance.records[0].notes == "Sjuk"


def test_manual_mark_unknown_student(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)

    with pytest.raises(ValidationError):
        recorder.record_manual("missing", AttendanceStatus.PRESENT, now=fixed_now)


def test_card_of_other_school_is_unknown(students, attendance, fixed_now):
    students.by_id["s3"] = replace(students.by_id["s3"], card_reader_id="FOREIGN")
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("FOREIGN"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.UNKNOWN_CARD
    assert attendance.records == []


def test_teacher_without_school_cannot_scan(students, attendance, fixed_now):
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("CARD42"), school_id=None, now=fixed_now)

    assert result.outcome is ScanOutcome.UNKNOWN_CARD
    assert attendance.records == []


def test_card_lookup_failure_is_write_failed(students, attendance, fixed_now):
    students.broken_cards.add("CARD42")
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.WRITE_FAILED
    assert result.cause == "card lookup timed out"


def test_duplicate_check_failure_is_write_failed(students, attendance, fixed_now):
    attendance.fail_reads_with = StorageError("read timed out")
    recorder = AttendanceRecorder(attendance, students)

    result = recorder.record_scan(CardToken("CARD42"), school_id="sch-1", now=fixed_now)

    assert result.outcome is ScanOutcome.WRITE_FAILED
    assert result.student.student_id == "s1"
    assert attendance.records == []
