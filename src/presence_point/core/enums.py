from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored in attendance_records.status."""

    PRESENT = "present"
    ABSENT = "absent"


class ScanOutcome(str, Enum):
    """Result of turning a card token (or a manual mark) into a record."""

    RECORDED = "recorded"
    ALREADY_MARKED = "already_marked"
    UNKNOWN_CARD = "unknown_card"
    WRITE_FAILED = "write_failed"


class NoticeLevel(str, Enum):
    """Flash categories understood by the templates."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
