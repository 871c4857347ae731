import threading

import pytest

from presence_point.attendance.model import ScanResult
from presence_point.attendance.recorder import AttendanceRecorder
from presence_point.core.enums import ScanOutcome
from presence_point.core.exceptions import ValidationError
from presence_point.scanning.service import ScanService, parse_events
from presence_point.scanning.sessions import ScanSessionRegistry


def _service(students, attendance):
    return ScanService(ScanSessionRegistry(gap_ms=100), AttendanceRecorder(attendance, students))


def test_parse_events_reads_browser_payload():
    events = parse_events([{"key": "A", "t": 5}, {"key": "Enter", "t": "12"}])

    assert [(e.key, e.timestamp_ms) for e in events] == [("A", 5), ("Enter", 12)]


def test_parse_events_rejects_malformed_items():
    with pytest.raises(ValidationError):
        parse_events([{"key": "A"}])


def test_sessions_are_isolated(students, attendance, fixed_now):
    svc = _service(students, attendance)
    svc.set_mode("a", enabled=True)

    events = parse_events([{"key": c, "t": i} for i, c in enumerate("CARD42")] + [{"key": "Enter", "t": 10}])

    assert svc.process("b", events, school_id="sch-1", now=fixed_now) == []
    results = svc.process("a", events, school_id="sch-1", now=fixed_now)
    assert [r.outcome for r in results] == [ScanOutcome.RECORDED]
    assert svc.is_enabled("a") and not svc.is_enabled("b")


def test_end_session_forgets_mode(students, attendance):
    svc = _service(students, attendance)
    svc.set_mode("a", enabled=True)

    svc.end_session("a")

    assert svc.is_enabled("a") is False


class BlockingRecorder:
    """Records tokens; the first call waits until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()
        self.tokens = []

    def record_scan(self, token, *, school_id, now=None):
        if not self.tokens:
            self.entered.set()
            self.release.wait(5)
        self.tokens.append(token.value)
        return ScanResult(outcome=ScanOutcome.RECORDED)


def test_batches_of_one_session_run_one_at_a_time():
    recorder = BlockingRecorder()
    svc = ScanService(ScanSessionRegistry(gap_ms=100), recorder)
    svc.set_mode("a", enabled=True)

    first = parse_events([{"key": "A", "t": 0}, {"key": "1", "t": 10}, {"key": "Enter", "t": 20}])
    second = parse_events([{"key": "B", "t": 1000}, {"key": "2", "t": 1010}, {"key": "Enter", "t": 1020}])

    t1 = threading.Thread(target=svc.process, args=("a", first), kwargs={"school_id": "sch-1"})
    t1.start()
    assert recorder.entered.wait(5)

    t2 = threading.Thread(target=svc.process, args=("a", second), kwargs={"school_id": "sch-1"})
    t2.start()
    t2.join(0.2)
    # The second batch cannot touch the tokenizer while the first is recording.
    assert t2.is_alive()

    recorder.release.set()
    t1.join(5)
    t2.join(5)

    assert recorder.tokens == ["A1", "B2"]


def test_other_sessions_are_not_blocked():
    recorder = BlockingRecorder()
    svc = ScanService(ScanSessionRegistry(gap_ms=100), recorder)
    svc.set_mode("a", enabled=True)
    events = parse_events([{"key": "A", "t": 0}, {"key": "Enter", "t": 10}])

    t1 = threading.Thread(target=svc.process, args=("a", events), kwargs={"school_id": "sch-1"})
    t1.start()
    assert recorder.entered.wait(5)

    assert svc.set_mode("b", enabled=True) is True

    recorder.release.set()
    t1.join(5)
