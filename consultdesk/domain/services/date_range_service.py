"""Date range resolution for list filters.
Turns a named range token plus a reference date into a closed date interval.
Every view (dashboard, engagements, invoices, time logs) resolves its filter
through this module so they all agree on what "this quarter" means.
"""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Union

from consultdesk.domain.models.base import InvalidRangeError, UnknownRangeTokenError
from consultdesk.domain.models.value_objects import DateRange


class DateRangeToken(str, Enum):
    """Recognized range filter tokens."""
    ALL = "all"
    TODAY = "today"
    CURRENT = "current"
    YEAR = "year"
    LAST = "last"
    MONTH = "month"
    QUARTER = "quarter"
    WEEK = "week"
    LAST3 = "last3"
    LAST6 = "last6"
    LAST12 = "last12"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Union[str, "DateRangeToken"]) -> "DateRangeToken":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownRangeTokenError(value)


_ROLLING_MONTHS = {
    DateRangeToken.LAST3: 3,
    DateRangeToken.LAST6: 6,
    DateRangeToken.LAST12: 12,
}


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    _, last_day = calendar.monthrange(value.year, value.month)
    return value.replace(day=last_day)


def shift_months(value: date, months: int) -> date:
    """Move a date by whole calendar months, clamping to the month's last day."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    _, last_day = calendar.monthrange(year, month + 1)
    return date(year, month + 1, min(value.day, last_day))


class DateRangeResolver:
    """
    Pure resolver from (token, reference date) to a DateRange.
    Results depend only on the arguments, never on the wall clock.
    """

    def resolve(
        self,
        token: Union[str, DateRangeToken],
        reference_date: date,
        custom_start: Optional[date] = None,
        custom_end: Optional[date] = None
    ) -> DateRange:
        """
        Resolve a range token.

        `all` yields the unbounded range; `custom` passes explicit bounds
        through after checking start <= end. Unknown tokens raise
        UnknownRangeTokenError instead of falling back to a default.
        """
        token = DateRangeToken.parse(token)
        ref = reference_date

        if token == DateRangeToken.ALL:
            return DateRange.unbounded()

        if token == DateRangeToken.CUSTOM:
            return self.custom(custom_start, custom_end)

        if token == DateRangeToken.TODAY:
            return DateRange(ref, ref)

        if token in (DateRangeToken.CURRENT, DateRangeToken.YEAR):
            return DateRange(date(ref.year, 1, 1), date(ref.year, 12, 31))

        if token == DateRangeToken.LAST:
            return DateRange(date(ref.year - 1, 1, 1), date(ref.year - 1, 12, 31))

        if token == DateRangeToken.MONTH:
            return DateRange(month_start(ref), month_end(ref))

        if token == DateRangeToken.QUARTER:
            first_month = 3 * ((ref.month - 1) // 3) + 1
            start = date(ref.year, first_month, 1)
            return DateRange(start, month_end(start.replace(month=first_month + 2)))

        if token == DateRangeToken.WEEK:
            monday = ref - timedelta(days=ref.weekday())
            return DateRange(monday, monday + timedelta(days=6))

        months = _ROLLING_MONTHS[token]
        return DateRange(month_start(shift_months(ref, -months)), ref)

    def custom(self, start: Optional[date], end: Optional[date]) -> DateRange:
        """Validate and pass through caller-supplied bounds."""
        if start is None or end is None:
            raise InvalidRangeError(start, end)
        if start > end:
            raise InvalidRangeError(start, end)
        return DateRange(start, end)

    def label(
        self,
        token: Union[str, DateRangeToken],
        reference_date: date,
        custom_start: Optional[date] = None,
        custom_end: Optional[date] = None
    ) -> str:
        """Human readable summary label for a range token."""
        token = DateRangeToken.parse(token)
        year = reference_date.year

        if token == DateRangeToken.ALL:
            return "All Time"
        if token in (DateRangeToken.CURRENT, DateRangeToken.YEAR):
            return f"{year} Year-to-Date"
        if token == DateRangeToken.LAST:
            return f"{year - 1} Year"
        if token == DateRangeToken.MONTH:
            return reference_date.strftime("%B %Y")
        if token == DateRangeToken.QUARTER:
            return f"Q{(reference_date.month - 1) // 3 + 1} {year}"
        if token == DateRangeToken.TODAY:
            return "Today"
        if token == DateRangeToken.WEEK:
            return "This Week"
        if token in _ROLLING_MONTHS:
            return f"Last {_ROLLING_MONTHS[token]} Months"
        return format_date_range(self.custom(custom_start, custom_end))


def format_date_range(date_range: DateRange) -> str:
    """
    Compact display of a date range, e.g. "March 1 - 15, 2025" or
    "March 1 - April 2, 2025".
    """
    if date_range.is_unbounded:
        return "All Time"

    start, end = date_range.start, date_range.end
    full = "{:%B} {}, {}"

    if start == end:
        return full.format(start, start.day, start.year)

    if start.year == end.year:
        if start.month == end.month:
            return f"{start:%B} {start.day} - {end.day}, {end.year}"
        return f"{start:%B} {start.day} - {end:%B} {end.day}, {end.year}"

    return f"{full.format(start, start.day, start.year)} - {full.format(end, end.day, end.year)}"
