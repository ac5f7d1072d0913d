"""
Unit tests for EngagementStatusResolver.
"""

import pytest
from datetime import date, datetime, timedelta

from consultdesk.domain.models.base import ValidationError
from consultdesk.domain.models.engagement import EngagementStatus
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.services.engagement_status_service import EngagementStatusResolver


START = date(2025, 3, 1)
END = date(2025, 3, 31)


class TestEngagementStatusResolver:
    """Test cases for EngagementStatusResolver."""

    def setup_method(self):
        self.resolver = EngagementStatusResolver()

    @pytest.mark.parametrize("now,expected", [
        (date(2025, 2, 28), EngagementStatus.UPCOMING),
        (date(2025, 3, 1), EngagementStatus.ACTIVE),
        (date(2025, 3, 15), EngagementStatus.ACTIVE),
        (date(2025, 3, 31), EngagementStatus.ACTIVE),
        (date(2025, 4, 1), EngagementStatus.COMPLETED),
    ])
    def test_resolve(self, now, expected):
        assert self.resolver.resolve(START, END, now) == expected

    def test_time_of_day_is_ignored(self):
        assert self.resolver.resolve(START, END, datetime(2025, 3, 31, 23, 59)) == EngagementStatus.ACTIVE
        assert self.resolver.resolve(START, END, datetime(2025, 3, 1, 0, 0)) == EngagementStatus.ACTIVE

    def test_single_day_engagement(self):
        day = date(2025, 3, 10)

        assert self.resolver.resolve(day, day, day) == EngagementStatus.ACTIVE
        assert self.resolver.resolve(day, day, date(2025, 3, 9)) == EngagementStatus.UPCOMING
        assert self.resolver.resolve(day, day, date(2025, 3, 11)) == EngagementStatus.COMPLETED

    def test_inverted_dates(self):
        with pytest.raises(ValidationError):
            self.resolver.resolve(END, START, date(2025, 3, 15))

    def test_status_sequence_over_time(self):
        """Test that statuses move upcoming, active, completed and never back."""
        order = [EngagementStatus.UPCOMING, EngagementStatus.ACTIVE, EngagementStatus.COMPLETED]
        statuses = [
            self.resolver.resolve(START, END, date(2025, 2, 15) + timedelta(days=offset))
            for offset in range(60)
        ]

        assert [order.index(status) for status in statuses] == sorted(order.index(status) for status in statuses)
        assert statuses.count(EngagementStatus.ACTIVE) == 31

    def test_filter_by_status(self, hourly_engagement, project_engagement):
        results = self.resolver.filter(
            [hourly_engagement, project_engagement],
            date(2025, 8, 1),
            status=EngagementStatus.ACTIVE,
        )

        assert [engagement.id for engagement, _ in results] == [10]

    def test_filter_by_overlap(self, hourly_engagement, project_engagement):
        results = self.resolver.filter(
            [hourly_engagement, project_engagement],
            date(2025, 8, 1),
            overlapping=DateRange(date(2025, 7, 1), date(2025, 7, 31)),
        )

        assert [engagement.id for engagement, _ in results] == [10]

    def test_annotate(self, hourly_engagement, project_engagement):
        annotated = dict(
            (engagement.id, status)
            for engagement, status in self.resolver.annotate([hourly_engagement, project_engagement], date(2025, 8, 1))
        )

        assert annotated == {10: EngagementStatus.ACTIVE, 20: EngagementStatus.COMPLETED}

    def test_count_active(self, hourly_engagement, project_engagement):
        assert self.resolver.count_active([hourly_engagement, project_engagement], date(2025, 5, 1)) == 2
        assert self.resolver.count_active([hourly_engagement, project_engagement], date(2024, 12, 31)) == 0
