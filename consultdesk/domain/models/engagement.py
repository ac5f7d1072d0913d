"""
Engagement domain model.
Represents a contracted unit of consulting work for a client, billed either
hourly or at a fixed project cost.

An engagement never stores its lifecycle status: upcoming/active/completed is
derived from its dates at read time by EngagementStatusResolver.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from consultdesk.domain.models.base import (
    AggregateRoot,
    MissingRateError,
    ValidationError,
)
from consultdesk.domain.models.value_objects import require_cents, to_decimal


class BillingMode(str, Enum):
    """How an engagement is billed."""
    HOURLY = "hourly"
    PROJECT = "project"


class EngagementStatus(str, Enum):
    """Lifecycle status derived from engagement dates."""
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


DEFAULT_NET_TERMS = 30


@dataclass(eq=False)
class Engagement(AggregateRoot):
    """
    Engagement aggregate root.
    end_date is inclusive. Exactly one of hourly_rate / total_cost is
    meaningful, depending on billing_mode.
    """

    owner_id: str
    client_id: int
    project_name: str
    start_date: date
    end_date: date
    billing_mode: BillingMode = BillingMode.HOURLY
    hourly_rate: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    net_terms: int = DEFAULT_NET_TERMS
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.billing_mode, BillingMode):
            try:
                self.billing_mode = BillingMode(self.billing_mode)
            except ValueError:
                raise ValidationError(f"Unknown billing mode: {self.billing_mode}", "billing_mode")

        if self.hourly_rate is not None:
            self.hourly_rate = to_decimal(self.hourly_rate)
            require_cents(self.hourly_rate, "hourly_rate", "Hourly rate")
        if self.total_cost is not None:
            self.total_cost = to_decimal(self.total_cost)
            require_cents(self.total_cost, "total_cost", "Project amount")

        if self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date", "end_date")

    @property
    def is_hourly(self) -> bool:
        return self.billing_mode == BillingMode.HOURLY

    @property
    def is_project(self) -> bool:
        return self.billing_mode == BillingMode.PROJECT

    def validate(self) -> None:
        """Validate engagement state, including rate/mode consistency."""
        if not self.owner_id:
            raise ValidationError("Owner is required", "owner_id")

        if not self.client_id:
            raise ValidationError("Client ID is required", "client_id")

        if not self.project_name or not self.project_name.strip():
            raise ValidationError("Project name is required", "project_name")

        if self.net_terms < 1:
            raise ValidationError("Net terms must be at least 1 day", "net_terms")

        if self.hourly_rate is not None:
            if self.hourly_rate <= 0:
                raise ValidationError("Hourly rate must be positive", "hourly_rate")
            require_cents(to_decimal(self.hourly_rate), "hourly_rate", "Hourly rate")

        if self.total_cost is not None:
            if self.total_cost <= 0:
                raise ValidationError("Project amount must be positive", "total_cost")
            require_cents(to_decimal(self.total_cost), "total_cost", "Project amount")

        self.require_rate()

    def require_rate(self) -> Decimal:
        """Return the rate field that drives billing for this mode."""
        if self.is_hourly:
            if self.hourly_rate is None:
                raise MissingRateError(self.id, self.billing_mode.value, "hourly_rate")
            return self.hourly_rate

        if self.total_cost is None:
            raise MissingRateError(self.id, self.billing_mode.value, "total_cost")
        return self.total_cost

    def reschedule(self, start_date: date, end_date: date) -> None:
        """Move the engagement's contract dates."""
        if end_date < start_date:
            raise ValidationError("End date cannot be before start date", "end_date")
        self.start_date = start_date
        self.end_date = end_date
        self.mark_as_updated()

    def change_billing(
        self,
        billing_mode: BillingMode,
        hourly_rate: Optional[Decimal] = None,
        total_cost: Optional[Decimal] = None
    ) -> None:
        """Switch billing mode and rate fields together."""
        self.billing_mode = BillingMode(billing_mode)
        self.hourly_rate = to_decimal(hourly_rate) if hourly_rate is not None else None
        self.total_cost = to_decimal(total_cost) if total_cost is not None else None
        self.validate()
        self.mark_as_updated()
