"""
Time log DTOs for the application layer.
"""

from typing import Optional
import datetime as dt
from decimal import Decimal
from pydantic import Field

from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import Money
from consultdesk.domain.services.reporting_service import TimeLogSummary
from .base_dto import BaseDTO, CreateRequestDTO, UpdateRequestDTO, ResponseDTO, DateRangeFilterDTO, MoneyDTO


class CreateTimeLogRequestDTO(CreateRequestDTO):
    """DTO for logging time against an engagement."""

    engagement_id: int = Field(gt=0)
    date: dt.date
    hours: Decimal = Field(gt=0, decimal_places=2, description="Hours worked, at most the per-entry maximum")
    description: Optional[str] = Field(default=None, max_length=2000)


class UpdateTimeLogRequestDTO(UpdateRequestDTO):
    """
    DTO for editing a time log. There is no engagement_id field: a time
    log cannot be moved to another engagement.
    """

    date: Optional[dt.date] = None
    hours: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=2000)


class ListTimeLogsRequestDTO(DateRangeFilterDTO):
    """Filters for listing time logs."""

    engagement_id: Optional[int] = None
    client_id: Optional[int] = None


class TimeLogResponseDTO(ResponseDTO):
    """DTO for time log responses."""

    engagement_id: int
    date: dt.date
    hours: Decimal
    description: Optional[str] = None
    billable_amount: MoneyDTO = Field(description="hours * rate for hourly engagements, zero for project ones")

    @classmethod
    def from_domain(cls, time_log: TimeLog, billable_amount: Money) -> "TimeLogResponseDTO":
        return cls(
            id=time_log.id,
            engagement_id=time_log.engagement_id,
            date=time_log.date,
            hours=time_log.hours,
            description=time_log.description,
            billable_amount=MoneyDTO.from_domain(billable_amount),
            created_at=time_log.created_at,
            updated_at=time_log.updated_at,
        )


class TimeLogSummaryResponseDTO(BaseDTO):
    """Totals for a filtered set of time logs."""

    label: str
    total_hours: Decimal
    billable_amount: MoneyDTO
    average_daily_hours: Decimal
    days_logged: int
    entry_count: int

    @classmethod
    def from_domain(cls, summary: TimeLogSummary, label: str) -> "TimeLogSummaryResponseDTO":
        return cls(
            label=label,
            total_hours=summary.total_hours,
            billable_amount=MoneyDTO.from_domain(summary.billable_amount),
            average_daily_hours=summary.average_daily_hours,
            days_logged=summary.days_logged,
            entry_count=summary.entry_count,
        )
