"""Tests for habitcore/clock.py: day keys and calendar arithmetic."""

from datetime import datetime
from zoneinfo import ZoneInfo

from habitcore.clock import Calendar

UTC = ZoneInfo("UTC")


def test_day_key_uses_calendar_timezone():
    cal = Calendar(ZoneInfo("America/New_York"))
    ts = datetime(2026, 2, 11, 3, 0, tzinfo=UTC)
    assert cal.day_key(ts) == "2026-02-10"


def test_is_same_day_in_timezone():
    cal = Calendar(ZoneInfo("America/New_York"))
    late = datetime(2026, 2, 11, 3, 0, tzinfo=UTC)
    evening = datetime(2026, 2, 10, 20, 0, tzinfo=UTC)
    assert cal.is_same_day(late, evening) is True
    assert Calendar(UTC).is_same_day(late, evening) is False


def test_naive_timestamp_is_local():
    cal = Calendar(ZoneInfo("Asia/Tokyo"))
    assert cal.day_key(datetime(2026, 2, 11, 23, 30)) == "2026-02-11"


def test_now_uses_now_fn(calendar):
    assert calendar.today_key() == "2026-02-11"


def test_add_days():
    cal = Calendar(UTC)
    ts = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    assert cal.day_key(cal.add_days(ts, -1)) == "2026-02-28"
    assert cal.day_key(cal.add_days(ts, 7)) == "2026-03-08"


def test_add_days_out_of_range_returns_none():
    cal = Calendar(UTC)
    assert cal.add_days(datetime(1, 1, 1, tzinfo=UTC), -1) is None
    assert cal.add_days(datetime(9999, 12, 31, tzinfo=UTC), 1) is None


def test_weekday_label():
    cal = Calendar(UTC)
    assert cal.weekday_label(datetime(2026, 2, 11, tzinfo=UTC)) == "Wed"


def test_parse_day_key():
    cal = Calendar(UTC)
    assert cal.parse_day_key("2026-02-11").day == 11
    assert cal.parse_day_key("garbage") is None


def test_from_settings(workspace):
    (workspace / "settings.yaml").write_text("timezone: Europe/Berlin\n", encoding="utf-8")
    assert Calendar.from_settings(workspace).tz == ZoneInfo("Europe/Berlin")


def test_from_settings_unknown_timezone(workspace):
    (workspace / "settings.yaml").write_text("timezone: Mars/Olympus\n", encoding="utf-8")
    assert Calendar.from_settings(workspace).tz == UTC
