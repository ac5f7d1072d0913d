"""
Base DTOs for the application layer.
Provides common patterns for request/response data transfer objects.
"""

from typing import Any, Dict, List, Optional, TypeVar, Generic
from datetime import datetime, date
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from consultdesk.domain.models.value_objects import Money


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Convert enum values to their values
        use_enum_values=True,
        # Validate assignment
        validate_assignment=True,
        extra="forbid",
    )


class RequestDTO(BaseDTO):
    """Base class for request DTOs."""
    pass


class ResponseDTO(BaseDTO):
    """Base class for response DTOs."""

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateRequestDTO(RequestDTO):
    """Base class for creation request DTOs."""
    pass


class UpdateRequestDTO(RequestDTO):
    """Base class for update request DTOs."""
    pass


class DateRangeFilterDTO(RequestDTO):
    """
    Named range filter shared by every list view.
    `date_range` is a range token; `start_date`/`end_date` are only used with
    the `custom` token; `reference_date` defaults to today.
    """

    date_range: str = Field(default="all", description="Range token (all, current, year, last, month, quarter, week, today, last3, last6, last12, custom)")
    start_date: Optional[date] = Field(default=None, description="Custom range start")
    end_date: Optional[date] = Field(default=None, description="Custom range end")
    reference_date: Optional[date] = Field(default=None, description="Date relative ranges are resolved against")


class MoneyDTO(BaseDTO):
    """Monetary amount with its currency."""

    amount: Decimal
    currency: str

    @classmethod
    def from_domain(cls, money: Money) -> "MoneyDTO":
        return cls(amount=money.amount, currency=money.currency.value)


T = TypeVar('T')


class ListResponseDTO(BaseDTO, Generic[T]):
    """List response with its item count."""

    items: List[T] = Field(description="List of items")
    total: int = Field(description="Total number of items")

    @classmethod
    def create(cls, items: List[T]) -> "ListResponseDTO[T]":
        return cls(items=items, total=len(items))


class HealthCheckResponseDTO(BaseDTO):
    """Health check response DTO."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    version: Optional[str] = Field(default=None, description="Application version")
    environment: Optional[str] = Field(default=None, description="Deployment environment")


class ErrorResponseDTO(BaseDTO):
    """Error response DTO."""

    error: str = Field(description="Error code")
    message: str = Field(description="Error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

