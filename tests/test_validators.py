"""Tests for shared time/date validation helpers."""

from datetime import date

import pytest

from maidhub.exceptions import ValidationError
from maidhub.shared.validators import (
    is_valid_time,
    normalize_time,
    parse_query_date,
    time_to_minutes,
    validate_time_range,
)


class TestTimeFormat:
    @pytest.mark.parametrize("value", ["00:00", "09:30", "9:30", "23:59", "17:05"])
    def test_valid_times(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", ["", None, "24:00", "12:60", "9", "09:5", "ab:cd", "09:00:00"])
    def test_invalid_times(self, value):
        assert not is_valid_time(value)

    def test_normalize_pads_hour(self):
        assert normalize_time("9:05") == "09:05"
        assert normalize_time("13:45") == "13:45"

    def test_normalize_rejects_malformed(self):
        with pytest.raises(ValidationError, match="HH:MM"):
            normalize_time("25:00")


class TestMinuteConversion:
    def test_time_to_minutes(self):
        assert time_to_minutes("00:00") == 0
        assert time_to_minutes("10:30") == 630
        assert time_to_minutes("23:59") == 1439


class TestTimeRange:
    def test_start_before_end_passes(self):
        validate_time_range("09:00", "09:01")

    @pytest.mark.parametrize("start,end", [("10:00", "10:00"), ("12:00", "09:00")])
    def test_equal_or_inverted_rejected(self, start, end):
        with pytest.raises(ValidationError, match="End time must be after start time"):
            validate_time_range(start, end)


class TestQueryDate:
    def test_plain_date(self):
        assert parse_query_date("2025-06-10") == date(2025, 6, 10)

    def test_time_component_dropped(self):
        assert parse_query_date("2025-06-10T15:30:00Z") == date(2025, 6, 10)

    def test_missing(self):
        with pytest.raises(ValidationError, match="Please provide a date"):
            parse_query_date(None)

    def test_malformed(self):
        with pytest.raises(ValidationError, match="Invalid date format"):
            parse_query_date("10/06/2025")
