"""
Engagement status derivation.
Status is a projection of an engagement's dates onto a reference day and is
recomputed on every read; nothing here is cached.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple, Union

from consultdesk.domain.models.base import ValidationError
from consultdesk.domain.models.engagement import Engagement, EngagementStatus
from consultdesk.domain.models.value_objects import DateRange


def _as_day(value: Union[date, datetime]) -> date:
    # compare calendar days only, never time of day
    if isinstance(value, datetime):
        return value.date()
    return value


class EngagementStatusResolver:
    """Derives upcoming / active / completed from start, end and now."""

    def resolve(
        self,
        start_date: Union[date, datetime],
        end_date: Union[date, datetime],
        now: Union[date, datetime]
    ) -> EngagementStatus:
        """
        First match wins: before start is upcoming, after end is completed,
        anything else (boundaries included) is active.
        """
        start, end, today = _as_day(start_date), _as_day(end_date), _as_day(now)
        if end < start:
            raise ValidationError("End date cannot be before start date", "end_date")

        if today < start:
            return EngagementStatus.UPCOMING
        if today > end:
            return EngagementStatus.COMPLETED
        return EngagementStatus.ACTIVE

    def status_of(self, engagement: Engagement, now: Union[date, datetime]) -> EngagementStatus:
        return self.resolve(engagement.start_date, engagement.end_date, now)

    def annotate(
        self,
        engagements: Iterable[Engagement],
        now: Union[date, datetime]
    ) -> List[Tuple[Engagement, EngagementStatus]]:
        """Pair each engagement with its status as of `now`."""
        return [(engagement, self.status_of(engagement, now)) for engagement in engagements]

    def filter(
        self,
        engagements: Iterable[Engagement],
        now: Union[date, datetime],
        status: Optional[EngagementStatus] = None,
        overlapping: Optional[DateRange] = None
    ) -> List[Tuple[Engagement, EngagementStatus]]:
        """
        Annotate and filter engagements by derived status and, optionally,
        by overlap of their contract dates with a date range.
        """
        result = []
        for engagement, engagement_status in self.annotate(engagements, now):
            if status is not None and engagement_status != status:
                continue
            if overlapping is not None and not overlapping.is_unbounded:
                if engagement.end_date < overlapping.start or engagement.start_date > overlapping.end:
                    continue
            result.append((engagement, engagement_status))
        return result

    def count_active(self, engagements: Iterable[Engagement], now: Union[date, datetime]) -> int:
        return sum(
            1 for engagement in engagements
            if self.status_of(engagement, now) == EngagementStatus.ACTIVE
        )
