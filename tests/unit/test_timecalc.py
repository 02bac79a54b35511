"""Tests for overtime_kernel.domain.timecalc."""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from overtime_kernel.domain.timecalc import (
    compute_duration_hours,
    first_day_of_previous_month,
    hours_between,
    month_bounds,
    month_key,
    parse_date,
    parse_month_key,
    parse_time_of_day,
    quantize_hours,
)
from overtime_kernel.exceptions import FormatError


class TestParseTimeOfDay:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("18:00", time(18, 0)),
            ("7:05", time(7, 5)),
            ("23:59:59", time(23, 59, 59)),
            (" 09:30 ", time(9, 30)),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_time_of_day(text) == expected

    def test_time_passes_through(self):
        t = time(6, 15)
        assert parse_time_of_day(t) is t

    @pytest.mark.parametrize("text", ["24:00", "12:60", "noon", "12", "", "1:2:3:4"])
    def test_invalid(self, text):
        with pytest.raises(FormatError) as exc_info:
            parse_time_of_day(text)
        assert exc_info.value.code == "FORMAT_ERROR"

    def test_non_string_rejected(self):
        with pytest.raises(FormatError):
            parse_time_of_day(1800)


class TestParseDate:
    def test_iso(self):
        assert parse_date("2024-03-14") == date(2024, 3, 14)

    def test_datetime_truncated(self):
        assert parse_date(datetime(2024, 3, 14, 18, 30)) == date(2024, 3, 14)

    def test_invalid(self):
        with pytest.raises(FormatError) as exc_info:
            parse_date("14/03/2024")
        assert exc_info.value.field == "date"


class TestComputeDurationHours:
    def test_same_day(self):
        assert compute_duration_hours(time(18, 0), time(22, 0)) == Decimal("4.00")

    def test_wraps_past_midnight(self):
        assert compute_duration_hours(time(22, 0), time(2, 0)) == Decimal("4.00")

    @pytest.mark.parametrize(
        "start, end",
        [(time(23, 0), time(1, 30)), (time(12, 0), time(11, 0)), (time(20, 15), time(0, 0))],
    )
    def test_end_before_start_adds_a_day(self, start, end):
        start_s = start.hour * 3600 + start.minute * 60
        end_s = end.hour * 3600 + end.minute * 60
        expected = quantize_hours(Decimal(end_s - start_s + 24 * 3600) / 3600)
        assert compute_duration_hours(start, end) == expected

    def test_equal_times_are_zero(self):
        assert compute_duration_hours(time(9, 0), time(9, 0)) == Decimal("0.00")

    def test_rounds_to_two_places(self):
        # 20 minutes = 0.333... hours
        assert compute_duration_hours(time(9, 0), time(9, 20)) == Decimal("0.33")

    def test_half_up_rounding(self):
        # 0.125 h = 7.5 minutes -> 0.13
        assert compute_duration_hours(time(9, 0, 0), time(9, 7, 30)) == Decimal("0.13")


class TestHoursBetween:
    def test_across_midnight(self):
        assert hours_between(
            datetime(2024, 3, 1, 22, 0), datetime(2024, 3, 2, 3, 30)
        ) == Decimal("5.50")


class TestMonthKey:
    def test_zero_padded(self):
        assert month_key(date(2024, 3, 9)) == "2024-03"

    def test_parse(self):
        assert parse_month_key("2024-12") == (2024, 12)

    @pytest.mark.parametrize("key", ["2024-13", "2024-3", "24-03", "", "2024-00"])
    def test_parse_invalid(self, key):
        with pytest.raises(FormatError):
            parse_month_key(key)

    def test_bounds_december_rolls_year(self):
        assert month_bounds("2024-12") == (date(2024, 12, 1), date(2025, 1, 1))

    def test_bounds_mid_year(self):
        assert month_bounds("2024-02") == (date(2024, 2, 1), date(2024, 3, 1))


class TestFirstDayOfPreviousMonth:
    def test_mid_month(self):
        assert first_day_of_previous_month(date(2024, 3, 15)) == date(2024, 2, 1)

    def test_january_rolls_back_a_year(self):
        assert first_day_of_previous_month(date(2024, 1, 31)) == date(2023, 12, 1)
