"""Invoice aggregation service.
Selects the time logs of an engagement that fall in a billing period and
turns them into an ordered, totalled invoice draft.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from consultdesk.domain.models.base import EmptyPeriodError
from consultdesk.domain.models.engagement import Engagement
from consultdesk.domain.models.invoice import InvoiceDraft, InvoiceLineItem
from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.services.billing_service import BillableAmountCalculator


def _line_order(item: InvoiceLineItem):
    # date ascending, then time log id ascending; synthetic lines sort last
    return (item.date, item.time_log_id is None, item.time_log_id or 0, item.line_id)


class InvoiceAggregator:
    """
    Domain service building InvoiceDraft objects.

    Hourly engagements get one line item per time log. Project engagements
    get a single fixed-fee line whose hours are informational only.
    """

    def __init__(self, calculator: Optional[BillableAmountCalculator] = None):
        self.calculator = calculator or BillableAmountCalculator()

    def select_time_logs(
        self,
        engagement: Engagement,
        period: DateRange,
        candidate_time_logs: Iterable[TimeLog]
    ) -> List[TimeLog]:
        """Time logs of this engagement dated inside the period (inclusive)."""
        return [
            time_log for time_log in candidate_time_logs
            if time_log.engagement_id == engagement.id and period.contains(time_log.date)
        ]

    def aggregate(
        self,
        engagement: Engagement,
        period_start: date,
        period_end: date,
        candidate_time_logs: Iterable[TimeLog],
        milestone_amount: Optional[Decimal] = None
    ) -> InvoiceDraft:
        """
        Build an invoice draft for the engagement over [period_start, period_end].

        Raises InvalidRangeError for an inverted period, MissingRateError when
        the engagement has no rate for its billing mode, and EmptyPeriodError
        when an hourly engagement has no time logs in the period.
        """
        period = DateRange(period_start, period_end)
        time_logs = self.select_time_logs(engagement, period, candidate_time_logs)

        if engagement.is_hourly:
            line_items = self._hourly_line_items(engagement, period, time_logs)
        else:
            line_items = [self._project_line_item(engagement, period, time_logs, milestone_amount)]

        return InvoiceDraft(
            engagement_id=engagement.id,
            client_id=engagement.client_id,
            billing_mode=engagement.billing_mode,
            period=period,
            line_items=tuple(sorted(line_items, key=_line_order)),
            currency=self.calculator.currency,
        )

    def _hourly_line_items(
        self,
        engagement: Engagement,
        period: DateRange,
        time_logs: List[TimeLog]
    ) -> List[InvoiceLineItem]:
        rate = engagement.require_rate()
        if not time_logs:
            raise EmptyPeriodError(engagement.id, period.start, period.end)

        line_items = []
        for index, time_log in enumerate(time_logs, start=1):
            amount = self.calculator.amount(time_log, engagement)
            line_items.append(InvoiceLineItem(
                line_id=f"timelog-{time_log.id}" if time_log.id is not None else f"line-{index}",
                time_log_id=time_log.id,
                date=time_log.date,
                hours=time_log.hours,
                description=self.calculator.describe(time_log),
                rate=rate,
                amount=amount.amount,
            ))
        return line_items

    def _project_line_item(
        self,
        engagement: Engagement,
        period: DateRange,
        time_logs: List[TimeLog],
        milestone_amount: Optional[Decimal]
    ) -> InvoiceLineItem:
        fee = self.calculator.project_fee(engagement, milestone_amount)
        hours = sum((time_log.hours for time_log in time_logs), Decimal("0"))

        description = f"Project fee for {engagement.project_name}"
        if milestone_amount is not None:
            description = f"Milestone payment for {engagement.project_name}"

        return InvoiceLineItem(
            line_id=f"project-{engagement.id}",
            time_log_id=None,
            date=period.end,
            hours=hours,
            description=description,
            rate=fee.amount,
            amount=fee.amount,
        )
