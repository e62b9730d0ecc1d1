"""Tests for the UTC clock helpers."""

from datetime import date, datetime, timedelta, timezone

from txaggregator.domain.shared import as_utc, today_utc, utc_now, years_before


class TestClock:
    def test_utc_now_is_aware(self):
        assert utc_now().utcoffset() == timedelta(0)

    def test_today_is_utc_date(self):
        before = utc_now().date()
        today = today_utc()
        after = utc_now().date()

        assert today in {before, after}


class TestAsUtc:
    def test_naive_value_is_taken_as_utc(self):
        naive = datetime(2024, 3, 1, 12, 30)

        assert as_utc(naive) == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)

    def test_other_offsets_are_converted(self):
        warsaw = timezone(timedelta(hours=1))
        local = datetime(2024, 3, 1, 13, 30, tzinfo=warsaw)

        converted = as_utc(local)

        assert converted.tzinfo == timezone.utc
        assert converted.hour == 12


class TestYearsBefore:
    def test_same_calendar_day(self):
        assert years_before(date(2024, 6, 15), 10) == date(2014, 6, 15)

    def test_leap_day_falls_back_to_feb_28(self):
        assert years_before(date(2024, 2, 29), 10) == date(2014, 2, 28)

    def test_leap_day_to_leap_year_is_kept(self):
        assert years_before(date(2024, 2, 29), 4) == date(2020, 2, 29)
