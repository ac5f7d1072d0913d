"""
Unit tests for TimeLog domain model.
"""

import pytest
from datetime import date
from decimal import Decimal

from consultdesk.domain.models.base import BusinessRuleViolation, ValidationError
from consultdesk.domain.models.time_log import TimeLog


def build_time_log(**overrides):
    values = dict(
        owner_id="user123",
        engagement_id=10,
        date=date(2025, 3, 1),
        hours=Decimal("4"),
        description="Schema design",
    )
    values.update(overrides)
    return TimeLog(**values)


class TestTimeLog:
    """Test cases for TimeLog domain model."""

    def test_hours_are_decimal(self):
        time_log = build_time_log(hours=2.5)

        assert time_log.hours == Decimal("2.5")

    @pytest.mark.parametrize("hours", ["0.25", "1", "8"])
    def test_valid_hours(self, hours):
        build_time_log(hours=Decimal(hours)).validate()

    @pytest.mark.parametrize("hours", ["0", "-1", "8.01", "12"])
    def test_hours_out_of_bounds(self, hours):
        with pytest.raises(ValidationError) as exc_info:
            build_time_log(hours=Decimal(hours)).validate()

        assert exc_info.value.field == "hours"

    @pytest.mark.parametrize("hours", ["0.125", "7.333"])
    def test_hours_beyond_cents_are_rejected(self, hours):
        with pytest.raises(ValidationError) as exc_info:
            build_time_log(hours=Decimal(hours))

        assert exc_info.value.field == "hours"

    def test_trailing_zeros_are_not_extra_precision(self):
        assert build_time_log(hours=Decimal("1.500")).hours == Decimal("1.5")

    def test_update_rejects_hours_beyond_cents(self):
        time_log = build_time_log()

        with pytest.raises(ValidationError, match="two decimal places"):
            time_log.update(hours=Decimal("1.005"))

    def test_configurable_maximum(self):
        time_log = build_time_log(hours=Decimal("10"))

        time_log.validate(max_hours=Decimal("12"))

        with pytest.raises(ValidationError):
            time_log.validate()

    def test_engagement_cannot_change(self):
        time_log = build_time_log()

        with pytest.raises(BusinessRuleViolation, match="cannot be moved"):
            time_log.engagement_id = 11

    def test_assigning_same_engagement_is_allowed(self):
        time_log = build_time_log()

        time_log.engagement_id = 10

        assert time_log.engagement_id == 10

    def test_update(self):
        time_log = build_time_log()

        time_log.update(log_date=date(2025, 3, 2), hours=Decimal("6"), description="Review")

        assert time_log.date == date(2025, 3, 2)
        assert time_log.hours == Decimal("6")
        assert time_log.description == "Review"

    def test_update_rejects_too_many_hours(self):
        time_log = build_time_log()

        with pytest.raises(ValidationError):
            time_log.update(hours=Decimal("9"))
