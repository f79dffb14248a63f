"""
Tests for the value normalizer.

Every function is total: bad input gives NaN / None, never an exception.
"""

import math
from datetime import date, datetime, time, timedelta

import pytest

from silo.shared.normalizer import (
    contains_word,
    duration_to_seconds,
    extract_season_years,
    is_finite,
    norm,
    parse_date,
    season_year,
    to_number,
    to_text,
)


# =============================================================================
# Test to_number
# =============================================================================

class TestToNumber:
    """Tests for to_number."""

    def test_decimal_comma(self):
        assert to_number("12,5") == 12.5

    def test_trims_whitespace(self):
        assert to_number(" 3 ") == 3.0

    def test_negative(self):
        assert to_number("-4") == -4.0

    def test_native_numbers_pass_through(self):
        assert to_number(7) == 7.0
        assert to_number(2.25) == 2.25

    @pytest.mark.parametrize("value", ["1:02", "abc", "", "1,234,5", "1e3", None, True, float("inf")])
    def test_rejects_non_plain_numbers(self, value):
        """Only -?digits(.digits) is accepted."""
        assert math.isnan(to_number(value))

    def test_only_ascii_digits(self):
        assert math.isnan(to_number("١٢"))
        assert math.isnan(to_number("１２,５"))


# =============================================================================
# Test duration_to_seconds
# =============================================================================

class TestDurationToSeconds:
    """Tests for duration_to_seconds."""

    def test_minutes_seconds(self):
        assert duration_to_seconds("1:02.345") == pytest.approx(62.345)

    def test_hours_minutes_seconds(self):
        assert duration_to_seconds("1:02:03") == pytest.approx(3723)

    def test_plain_seconds_string(self):
        assert duration_to_seconds("38.5") == pytest.approx(38.5)
        assert duration_to_seconds("38,5") == pytest.approx(38.5)

    def test_day_fraction(self):
        """Numbers in (0, 1) are spreadsheet time cells."""
        assert duration_to_seconds(0.5) == pytest.approx(43200)

    def test_plain_number(self):
        assert duration_to_seconds(75) == 75.0

    def test_time_and_timedelta(self):
        assert duration_to_seconds(time(0, 1, 2, 345000)) == pytest.approx(62.345)
        assert duration_to_seconds(timedelta(minutes=1, seconds=2)) == pytest.approx(62)

    @pytest.mark.parametrize("value", ["1:xx", "1:2:3:4", "", "1::2", None, "abc", True])
    def test_bad_input_is_nan(self, value):
        assert math.isnan(duration_to_seconds(value))

    def test_only_ascii_digits(self):
        assert math.isnan(duration_to_seconds("١٢"))
        assert math.isnan(duration_to_seconds("١:٠٢"))


# =============================================================================
# Test parse_date
# =============================================================================

class TestParseDate:
    """Tests for parse_date."""

    def test_day_first_dashes(self):
        """dd-mm-yyyy keeps its components."""
        assert parse_date("02-11-2019") == date(2019, 11, 2)

    def test_day_first_short_year(self):
        assert parse_date("2/11/19") == date(2019, 11, 2)

    def test_invalid_day_first_date(self):
        assert parse_date("31-02-2019") is None

    def test_spreadsheet_serial(self):
        assert parse_date(43831) == date(2020, 1, 1)

    def test_iso_string(self):
        assert parse_date("2019-11-02") == date(2019, 11, 2)

    def test_native_values(self):
        assert parse_date(datetime(2019, 11, 2, 10, 30)) == date(2019, 11, 2)
        assert parse_date(date(2019, 11, 2)) == date(2019, 11, 2)

    def test_generic_text(self):
        assert parse_date("2 November 2019") == date(2019, 11, 2)

    @pytest.mark.parametrize("value", ["not a date", "", "   ", None, True])
    def test_unparseable_is_none(self, value):
        assert parse_date(value) is None


# =============================================================================
# Test season years
# =============================================================================

class TestSeasonYears:
    """Tests for extract_season_years and season_year."""

    def test_season_range(self):
        assert extract_season_years("1991/1992") == {1991, 1992}

    def test_text_with_years(self):
        assert extract_season_years("Seizoen 2019-2020") == {2019, 2020}

    def test_plain_year_number(self):
        assert extract_season_years(2019) == {2019}

    def test_serial_number(self):
        assert extract_season_years(43831) == {2020}

    def test_date_value(self):
        assert extract_season_years(date(2018, 1, 1)) == {2018}

    def test_years_need_digit_boundaries(self):
        assert extract_season_years("12019") == set()

    def test_out_of_range_number(self):
        assert extract_season_years(500) == set()

    def test_season_year_is_latest(self):
        assert season_year("1991/1992") == 1992
        assert season_year("") is None


# =============================================================================
# Test text helpers
# =============================================================================

class TestTextHelpers:
    """Tests for to_text, norm and is_finite."""

    def test_integral_float_loses_fraction(self):
        assert to_text(3.0) == "3"
        assert to_text(2.5) == "2.5"

    def test_midnight_datetime_is_date(self):
        assert to_text(datetime(2019, 11, 2)) == "2019-11-02"

    def test_none_is_empty(self):
        assert to_text(None) == ""

    def test_norm(self):
        assert norm("  Naam ") == "naam"

    def test_contains_word(self):
        assert contains_word("WK 2019 Inzell", "wk")
        assert contains_word("OS 2018", " OS ")
        assert not contains_word("World Cup Oslo", "os")
        assert not contains_word("Boston", "os")
        assert not contains_word("WK", "")

    def test_is_finite(self):
        assert is_finite(1.5)
        assert not is_finite(float("nan"))
        assert not is_finite("1")
        assert not is_finite(True)
