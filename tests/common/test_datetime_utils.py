from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from presence_point.common.datetime_utils import day_window, now_local, use_timezone

STOCKHOLM = ZoneInfo("Europe/Stockholm")


def test_day_window_on_spring_forward_day():
    start, end = day_window(datetime(2024, 3, 31, 12, 0, tzinfo=STOCKHOLM))

    assert start.isoformat() == "2024-03-31T00:00:00+01:00"
    assert end.isoformat() == "2024-04-01T00:00:00+02:00"
    assert end.astimezone(timezone.utc) - start.astimezone(timezone.utc) == timedelta(hours=23)


def test_day_window_on_fall_back_day():
    start, end = day_window(datetime(2024, 10, 27, 23, 30, tzinfo=STOCKHOLM))

    assert start.isoformat() == "2024-10-27T00:00:00+02:00"
    assert end.isoformat() == "2024-10-28T00:00:00+01:00"


def test_day_window_keeps_fixed_offset_input():
    start, end = day_window(datetime(2024, 3, 12, 9, 30, tzinfo=timezone.utc))

    assert start == datetime(2024, 3, 12, tzinfo=timezone.utc)
    assert end == datetime(2024, 3, 13, tzinfo=timezone.utc)


def test_now_local_uses_configured_zone():
    try:
        use_timezone("America/New_York")
        assert now_local().tzinfo == ZoneInfo("America/New_York")
    finally:
        use_timezone("Europe/Stockholm")
