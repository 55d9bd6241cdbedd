"""
Tests for range validation and active duration.
"""

import pytest

from bookingwindow.domain.models import BookingWindow
from bookingwindow.domain.range_validator import active_duration, is_valid, validate
from bookingwindow.domain.results import ValidationFailed


class TestIsValid:
    """Tests for is_valid."""

    @pytest.mark.parametrize(
        "opening, closing",
        [("09:00", "21:00"), ("00:00", "00:01"), ("10:00", "22:00"), ("11:59", "12:00")],
    )
    def test_closing_after_opening(self, opening, closing):
        assert is_valid(opening, closing)

    @pytest.mark.parametrize(
        "opening, closing",
        [("10:00", "10:00"), ("10:00", "08:00"), ("21:00", "09:00"), ("22:00", "02:00")],
    )
    def test_closing_not_after_opening(self, opening, closing):
        """Equal and overnight ranges are rejected."""
        assert not is_valid(opening, closing)

    @pytest.mark.parametrize(
        "opening, closing",
        [("", "21:00"), ("09:00", ""), (None, "21:00"), ("09:00", None), ("", "")],
    )
    def test_missing_value(self, opening, closing):
        assert not is_valid(opening, closing)

    def test_malformed_value(self):
        """Unparsable values are invalid, not errors."""
        assert not is_valid("nine", "21:00")
        assert not is_valid("09:00", "2100")


class TestActiveDuration:
    """Tests for active_duration."""

    def test_whole_hours(self):
        assert active_duration("09:00", "21:00") == "12 hours"

    def test_hours_and_minutes(self):
        assert active_duration("09:30", "21:00") == "11h 30m"

    def test_less_than_an_hour(self):
        assert active_duration("09:00", "09:45") == "0h 45m"

    def test_invalid_range_is_zero(self):
        assert active_duration("21:00", "09:00") == 0
        assert active_duration("10:00", "10:00") == 0
        assert active_duration("", "09:00") == 0
        assert active_duration("junk", "09:00") == 0


class TestValidate:
    """Tests for validate."""

    def test_valid_window(self):
        assert validate(BookingWindow("10:00", "22:00")) is None

    def test_invalid_window(self):
        failure = validate(BookingWindow("10:00", "08:00"))

        assert isinstance(failure, ValidationFailed)
        assert failure.message == "Closing time must be after opening time"
        assert not failure.ok
