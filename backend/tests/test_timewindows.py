import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from timewindows import (
    day_window,
    local_date,
    local_range_window,
    local_weekday,
    resolve_timezone,
    as_utc,
    week_window,
)

NEW_YORK = ZoneInfo("America/New_York")
UTC = ZoneInfo("UTC")


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestResolveTimezone:
    def test_known_zone(self):
        resolved = resolve_timezone("America/New_York")
        assert resolved.name == "America/New_York"
        assert resolved.fell_back is False

    def test_missing_name_uses_default_without_fallback_flag(self):
        resolved = resolve_timezone(None)
        assert resolved.name == "UTC"
        assert resolved.fell_back is False

    def test_unknown_zone_falls_back_to_utc_and_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="timewindows"):
            resolved = resolve_timezone("Mars/Olympus_Mons")
        assert resolved.name == "UTC"
        assert resolved.fell_back is True
        assert resolved.requested == "Mars/Olympus_Mons"
        assert "Mars/Olympus_Mons" in caplog.text

    def test_malformed_name_falls_back(self):
        assert resolve_timezone("../etc/passwd").fell_back is True


class TestDayWindow:
    def test_utc_day(self):
        window = day_window(UTC, utc(2024, 1, 15, 13, 0))
        assert window == (utc(2024, 1, 15), utc(2024, 1, 16))

    def test_instant_is_converted_to_local_date_first(self):
        # 04:30Z on the 15th is 23:30 on the 14th in New York.
        window = day_window(NEW_YORK, utc(2024, 1, 15, 4, 30))
        assert window == (utc(2024, 1, 14, 5), utc(2024, 1, 15, 5))
        assert window.contains(utc(2024, 1, 15, 4, 30))

    def test_plain_date_is_the_civil_date(self):
        window = day_window(NEW_YORK, date(2024, 1, 14))
        assert window == (utc(2024, 1, 14, 5), utc(2024, 1, 15, 5))

    def test_bounds_are_aware_utc(self):
        window = day_window(NEW_YORK, date(2024, 1, 14))
        assert window.start.utcoffset() == timedelta(0)
        assert window.end.utcoffset() == timedelta(0)

    def test_same_inputs_give_same_window(self):
        instant = utc(2024, 7, 4, 18, 0)
        assert day_window(NEW_YORK, instant) == day_window(NEW_YORK, instant)

    def test_spring_forward_day_is_23_hours(self):
        window = day_window(NEW_YORK, date(2024, 3, 10))
        assert window.start == utc(2024, 3, 10, 5)
        assert window.end == utc(2024, 3, 11, 4)
        assert window.end - window.start == timedelta(hours=23)

    def test_fall_back_day_is_25_hours(self):
        window = day_window(NEW_YORK, date(2024, 11, 3))
        assert window.start == utc(2024, 11, 3, 4)
        assert window.end == utc(2024, 11, 4, 5)
        assert window.end - window.start == timedelta(hours=25)

    def test_end_is_exclusive(self):
        window = day_window(UTC, date(2024, 1, 15))
        assert window.contains(utc(2024, 1, 15, 23, 59, 59, 999000))
        assert not window.contains(utc(2024, 1, 16))


class TestWeekWindow:
    def test_week_starts_on_local_sunday(self):
        # Wednesday 2024-01-17
        window = week_window(NEW_YORK, utc(2024, 1, 17, 12, 0))
        assert window == (utc(2024, 1, 14, 5), utc(2024, 1, 21, 5))

    def test_sunday_starts_its_own_week(self):
        window = week_window(UTC, utc(2024, 1, 14, 0, 0))
        assert window.start == utc(2024, 1, 14)

    def test_saturday_evening_local_is_still_the_same_week(self):
        # 03:00Z Sunday is 22:00 Saturday in New York.
        window = week_window(NEW_YORK, utc(2024, 1, 21, 3, 0))
        assert window.start == utc(2024, 1, 14, 5)

    def test_week_across_dst_change_is_seven_civil_days(self):
        window = week_window(NEW_YORK, utc(2024, 3, 12, 12, 0))
        assert window == (utc(2024, 3, 10, 5), utc(2024, 3, 17, 4))


class TestLocalCalendar:
    def test_local_date(self):
        assert local_date(NEW_YORK, utc(2025, 1, 1, 2, 0)) == date(2024, 12, 31)

    def test_local_weekday_sunday_is_zero(self):
        assert local_weekday(UTC, utc(2024, 1, 14, 12, 0)) == 0
        assert local_weekday(UTC, utc(2024, 1, 20, 12, 0)) == 6

    def test_local_weekday_uses_local_date(self):
        # 2025-01-01 is a Wednesday in UTC but still Tuesday in New York.
        assert local_weekday(NEW_YORK, utc(2025, 1, 1, 2, 0)) == 2

    def test_late_evening_on_short_dst_day_keeps_its_weekday(self):
        # 23:30 EDT on Sunday 2024-03-10.
        instant = datetime(2024, 3, 10, 23, 30, tzinfo=NEW_YORK)
        assert as_utc(instant) == utc(2024, 3, 11, 3, 30)
        assert local_weekday(NEW_YORK, instant) == 0
        assert day_window(NEW_YORK, date(2024, 3, 10)).contains(instant)

    def test_range_window_is_inclusive_of_last_day(self):
        window = local_range_window(UTC, date(2024, 1, 1), date(2024, 1, 3))
        assert window == (utc(2024, 1, 1), utc(2024, 1, 4))
