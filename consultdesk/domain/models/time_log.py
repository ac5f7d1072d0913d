"""
TimeLog domain model.
A single dated entry of hours worked against an engagement.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from consultdesk.domain.models.base import (
    BaseEntity,
    BusinessRuleViolation,
    ValidationError,
)
from consultdesk.domain.models.value_objects import require_cents, to_decimal


MAX_HOURS_PER_ENTRY = Decimal("8")


@dataclass(eq=False)
class TimeLog(BaseEntity):
    """
    TimeLog entity.
    Its billable amount is never stored; BillableAmountCalculator derives it
    from the hours and the owning engagement's rate.
    """

    owner_id: str
    engagement_id: int
    date: date
    hours: Decimal
    description: Optional[str] = None

    def __post_init__(self):
        self.hours = to_decimal(self.hours)
        require_cents(self.hours, "hours", "Hours")

    def __setattr__(self, name: str, value: Any) -> None:
        # engagement_id is fixed once assigned
        if name == "engagement_id" and getattr(self, "engagement_id", None) is not None:
            if value != self.engagement_id:
                raise BusinessRuleViolation("A time log cannot be moved to another engagement")
        super().__setattr__(name, value)

    def validate(self, max_hours: Decimal = MAX_HOURS_PER_ENTRY) -> None:
        """Validate time log state."""
        if not self.owner_id:
            raise ValidationError("Owner is required", "owner_id")

        if not self.engagement_id:
            raise ValidationError("Engagement ID is required", "engagement_id")

        if self.hours <= 0:
            raise ValidationError("Hours must be positive", "hours")

        if self.hours > max_hours:
            raise ValidationError(f"Hours cannot exceed {max_hours} per entry", "hours")

        require_cents(to_decimal(self.hours), "hours", "Hours")

    def update(
        self,
        log_date: Optional[date] = None,
        hours: Optional[Decimal] = None,
        description: Optional[str] = None,
        max_hours: Decimal = MAX_HOURS_PER_ENTRY
    ) -> None:
        """Edit the mutable fields of the entry."""
        if log_date is not None:
            self.date = log_date
        if hours is not None:
            self.hours = to_decimal(hours)
        if description is not None:
            self.description = description
        self.validate(max_hours)
        self.mark_as_updated()
