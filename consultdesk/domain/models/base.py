"""
Base entity and domain exceptions for the domain layer.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime
from typing import Optional, Any, Dict
from abc import ABC
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    Provides common attributes and behavior for all entities.
    """

    id: Optional[int] = field(default=None, kw_only=True)
    created_at: datetime = field(default_factory=datetime.utcnow, kw_only=True)
    updated_at: datetime = field(default_factory=datetime.utcnow, kw_only=True)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def mark_as_updated(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        data = {}
        for key, value in self.__dict__.items():
            if key.startswith('_'):
                continue
            data[key] = _serialize(value)
        return data


def _serialize(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, BaseEntity):
        return value.to_dict()
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value


@dataclass(eq=False)
class AggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.
    Aggregate roots are the entry points to aggregates and carry a version
    for optimistic locking.
    """

    version: int = field(default=1, kw_only=True)

    def increment_version(self) -> None:
        """Increment the aggregate version for optimistic locking."""
        self.version += 1
        self.mark_as_updated()


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


# Billing engine errors

class InvalidRangeError(DomainException):
    """Raised when explicit date bounds are malformed (start after end)."""

    def __init__(self, start: Any, end: Any):
        if start is None or end is None:
            message = "A custom range needs both a start and an end date"
        else:
            message = f"Range start {start} is after range end {end}"
        super().__init__(message, "INVALID_RANGE")
        self.start = start
        self.end = end


class UnknownRangeTokenError(DomainException):
    """Raised when a date-range filter token is not recognized."""

    def __init__(self, token: Any):
        super().__init__(f"Unknown date range token: {token!r}", "UNKNOWN_RANGE_TOKEN")
        self.token = token


class MissingRateError(DomainException):
    """Raised when an engagement's billing mode has no matching rate field."""

    def __init__(self, engagement_id: Any, billing_mode: str, rate_field: str):
        super().__init__(
            f"Engagement {engagement_id} is billed '{billing_mode}' but has no {rate_field}",
            "MISSING_RATE",
        )
        self.engagement_id = engagement_id
        self.billing_mode = billing_mode
        self.rate_field = rate_field


class EmptyPeriodError(DomainException):
    """Raised when an hourly invoice draft has no time logs in its period."""

    def __init__(self, engagement_id: Any, period_start: Any, period_end: Any):
        super().__init__(
            f"No time logs for engagement {engagement_id} between {period_start} and {period_end}",
            "EMPTY_PERIOD",
        )
        self.engagement_id = engagement_id
        self.period_start = period_start
        self.period_end = period_end


class ConcurrentAggregationConflict(DomainException):
    """
    Raised when another invoice generation for the same engagement and
    period is already in flight. Callers may retry once it finishes.
    """

    def __init__(self, engagement_id: Any, period_start: Any, period_end: Any):
        super().__init__(
            f"Invoice generation already in progress for engagement {engagement_id} "
            f"({period_start} - {period_end})",
            "CONCURRENT_AGGREGATION",
        )
        self.engagement_id = engagement_id
        self.period_start = period_start
        self.period_end = period_end
