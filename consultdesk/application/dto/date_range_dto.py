"""
Date range DTOs.
"""

from datetime import date
from typing import Optional
from pydantic import Field

from consultdesk.domain.models.value_objects import DateRange
from .base_dto import BaseDTO


class DateRangeResponseDTO(BaseDTO):
    """A resolved range filter."""

    token: str = Field(description="Range token that was resolved")
    start: Optional[date] = Field(default=None, description="Inclusive start, null when unbounded")
    end: Optional[date] = Field(default=None, description="Inclusive end, null when unbounded")
    is_unbounded: bool
    label: str = Field(description="Human readable label, e.g. '2025 Year-to-Date'")
    display: str = Field(description="Compact display of the concrete dates")

    @classmethod
    def from_domain(cls, token: str, date_range: DateRange, label: str, display: str) -> "DateRangeResponseDTO":
        return cls(
            token=token,
            start=date_range.start,
            end=date_range.end,
            is_unbounded=date_range.is_unbounded,
            label=label,
            display=display,
        )
