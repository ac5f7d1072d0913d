"""
Domain models for the consulting practice.
This module exports all domain entities, value objects and domain errors.
"""

# Base classes and errors
from .base import (
    BaseEntity,
    AggregateRoot,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    InvalidRangeError,
    UnknownRangeTokenError,
    MissingRateError,
    EmptyPeriodError,
    ConcurrentAggregationConflict,
)

# Value Objects
from .value_objects import (
    Money,
    Currency,
    DateRange,
    InvoiceNumber,
    BillingContact,
)

# Domain entities
from .client import Client
from .engagement import Engagement, BillingMode, EngagementStatus
from .time_log import TimeLog
from .invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceLineItem,
    InvoiceStatus,
    OUTSTANDING_STATUSES,
)

__all__ = [
    "BaseEntity",
    "AggregateRoot",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "InvalidRangeError",
    "UnknownRangeTokenError",
    "MissingRateError",
    "EmptyPeriodError",
    "ConcurrentAggregationConflict",
    "Money",
    "Currency",
    "DateRange",
    "InvoiceNumber",
    "BillingContact",
    "Client",
    "Engagement",
    "BillingMode",
    "EngagementStatus",
    "TimeLog",
    "Invoice",
    "InvoiceDraft",
    "InvoiceLineItem",
    "InvoiceStatus",
    "OUTSTANDING_STATUSES",
]
