"""
Engagement DTOs for the application layer.
The status field is always computed at read time, never accepted as input.
"""

from typing import Optional
from datetime import date
from decimal import Decimal
from pydantic import Field

from consultdesk.domain.models.engagement import BillingMode, Engagement, EngagementStatus
from .base_dto import CreateRequestDTO, UpdateRequestDTO, ResponseDTO, DateRangeFilterDTO


class CreateEngagementRequestDTO(CreateRequestDTO):
    """DTO for creating a new engagement."""

    client_id: int = Field(gt=0, description="Owning client")
    project_name: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: date = Field(description="Inclusive end date")
    billing_mode: BillingMode = Field(default=BillingMode.HOURLY)
    hourly_rate: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2, description="Required for hourly billing")
    total_cost: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2, description="Required for project billing")
    net_terms: Optional[int] = Field(default=None, ge=1, le=365, description="Days until invoices are due")
    description: Optional[str] = Field(default=None, max_length=2000)


class UpdateEngagementRequestDTO(UpdateRequestDTO):
    """DTO for editing an engagement's dates, billing or description."""

    project_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    billing_mode: Optional[BillingMode] = None
    hourly_rate: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    total_cost: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    net_terms: Optional[int] = Field(default=None, ge=1, le=365)
    description: Optional[str] = Field(default=None, max_length=2000)


class ListEngagementsRequestDTO(DateRangeFilterDTO):
    """Filters for listing engagements; the range matches overlapping contracts."""

    status: Optional[EngagementStatus] = None
    client_id: Optional[int] = None


class EngagementResponseDTO(ResponseDTO):
    """DTO for engagement responses."""

    client_id: int
    project_name: str
    start_date: date
    end_date: date
    billing_mode: BillingMode
    hourly_rate: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    net_terms: int
    description: Optional[str] = None
    status: EngagementStatus = Field(description="Derived from the dates at read time")

    @classmethod
    def from_domain(cls, engagement: Engagement, status: EngagementStatus) -> "EngagementResponseDTO":
        return cls(
            id=engagement.id,
            client_id=engagement.client_id,
            project_name=engagement.project_name,
            start_date=engagement.start_date,
            end_date=engagement.end_date,
            billing_mode=engagement.billing_mode,
            hourly_rate=engagement.hourly_rate,
            total_cost=engagement.total_cost,
            net_terms=engagement.net_terms,
            description=engagement.description,
            status=status,
            created_at=engagement.created_at,
            updated_at=engagement.updated_at,
        )
