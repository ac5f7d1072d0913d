"""Billing service for computing billable amounts.
Handles the hourly/project billing mode distinction for time logs.
"""

from decimal import Decimal
from typing import Dict, Iterable, Optional, Union

from consultdesk.domain.models.base import BusinessRuleViolation, ValidationError
from consultdesk.domain.models.engagement import Engagement
from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import Currency, Money, to_decimal


class BillableAmountCalculator:
    """
    Domain service for the monetary value of time logs.

    Hourly engagements bill hours * hourly_rate per log. Project engagements
    do not apportion their fixed cost across logs: a project log is worth
    zero on its own, and the fixed fee is charged once per invoice via
    project_fee().
    """

    def __init__(self, currency: Union[Currency, str] = Currency.USD):
        self.currency = Currency(currency)

    def amount(self, time_log: TimeLog, engagement: Engagement) -> Money:
        """
        Billable amount of a single time log.
        Raises MissingRateError when the engagement lacks its mode's rate.
        """
        if engagement.id is not None and time_log.engagement_id != engagement.id:
            raise ValidationError(
                f"Time log {time_log.id} does not belong to engagement {engagement.id}",
                "engagement_id"
            )

        rate = engagement.require_rate()
        if engagement.is_project:
            return Money.zero(self.currency)

        return self.hourly_amount(time_log.hours, rate)

    def hourly_amount(
        self,
        hours: Union[Decimal, float, str],
        rate: Union[Decimal, float, str]
    ) -> Money:
        """hours * rate, exact decimal arithmetic rounded half-up to cents."""
        return Money(to_decimal(hours) * to_decimal(rate), self.currency)

    def project_fee(self, engagement: Engagement, milestone_amount: Optional[Decimal] = None) -> Money:
        """
        Fixed charge for a project engagement invoice: the full total cost,
        or a partial milestone amount that may not exceed it.
        """
        if not engagement.is_project:
            raise BusinessRuleViolation(f"Engagement {engagement.id} is not billed per project")

        total_cost = engagement.require_rate()
        if milestone_amount is None:
            return Money(total_cost, self.currency)

        milestone = to_decimal(milestone_amount)
        if milestone <= 0:
            raise ValidationError("Milestone amount must be positive", "milestone_amount")

        if milestone > total_cost:
            raise ValidationError("Milestone amount cannot exceed the project total", "milestone_amount")

        return Money(milestone, self.currency)

    def billable_total(
        self,
        time_logs: Iterable[TimeLog],
        engagements: Dict[int, Engagement]
    ) -> Money:
        """
        Sum of per-log billable amounts. Logs whose engagement is unknown
        are skipped.
        """
        total = Money.zero(self.currency)
        for time_log in time_logs:
            engagement = engagements.get(time_log.engagement_id)
            if engagement is None:
                continue
            total = total.add(self.amount(time_log, engagement))
        return total

    def describe(self, time_log: TimeLog) -> str:
        """
        Format time log for invoice line item description.
        """
        text = time_log.description or "Consulting services"
        return f"{text} ({time_log.date.strftime('%m/%d/%Y')})"
