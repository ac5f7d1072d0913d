"""Reporting service for dashboard and list summaries.
Every report is a pure reduction over the collections passed in; callers
load the tenant's records and pass the reference time explicitly.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Union

from consultdesk.domain.models.client import Client
from consultdesk.domain.models.engagement import Engagement, EngagementStatus
from consultdesk.domain.models.invoice import Invoice, InvoiceStatus, OUTSTANDING_STATUSES
from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.models.value_objects import Currency, DateRange, Money
from consultdesk.domain.services.billing_service import BillableAmountCalculator
from consultdesk.domain.services.engagement_status_service import EngagementStatusResolver

ZERO_HOURS = Decimal("0")
PERCENT = Decimal("0.1")


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    if not whole:
        return Decimal("0.0")
    return (part / whole * 100).quantize(PERCENT, rounding=ROUND_HALF_UP)


def _as_day(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


@dataclass
class DashboardSummary:
    """The four dashboard metrics for one year."""
    year: int
    ytd_revenue: Money
    active_engagements_count: int
    monthly_hours: Dict[int, Decimal]
    pending_invoices_total: Money


@dataclass
class MonthlyRevenue:
    month: int
    revenue: Money
    hours: Decimal


@dataclass
class ClientRollup:
    client_id: int
    client_name: Optional[str]
    engagement_count: int = 0
    active_engagement_count: int = 0
    total_hours: Decimal = ZERO_HOURS
    total_invoiced: Money = field(default_factory=Money.zero)
    outstanding_total: Money = field(default_factory=Money.zero)


@dataclass
class TimeLogSummary:
    total_hours: Decimal
    billable_amount: Money
    average_daily_hours: Decimal
    days_logged: int
    entry_count: int


@dataclass
class InvoiceSummary:
    invoice_count: int
    total_invoiced: Money
    paid_total: Money
    outstanding_total: Money
    paid_percentage: Decimal
    outstanding_percentage: Decimal


class ClientAggregationReporting:
    """
    Rolls up engagements, time logs and invoices for dashboards.

    Revenue counts paid invoices only, by issue date. Pending totals count
    every outstanding status (pending, submitted, overdue).
    """

    def __init__(
        self,
        status_resolver: Optional[EngagementStatusResolver] = None,
        calculator: Optional[BillableAmountCalculator] = None
    ):
        self.status_resolver = status_resolver or EngagementStatusResolver()
        self.calculator = calculator or BillableAmountCalculator()

    @property
    def currency(self) -> Currency:
        return self.calculator.currency

    def _sum_invoices(self, invoices: Iterable[Invoice]) -> Money:
        return Money(sum((invoice.total_amount for invoice in invoices), Decimal("0")), self.currency)

    def ytd_revenue(self, invoices: Iterable[Invoice], year: int, now: Union[date, datetime]) -> Money:
        """Paid invoices issued between Jan 1 of `year` and `now` (capped at Dec 31)."""
        start = date(year, 1, 1)
        end = min(date(year, 12, 31), _as_day(now))
        if end < start:
            return Money.zero(self.currency)

        window = DateRange(start, end)
        return self._sum_invoices(
            invoice for invoice in invoices
            if invoice.status == InvoiceStatus.PAID and window.contains(invoice.issue_date)
        )

    def monthly_hours(self, time_logs: Iterable[TimeLog], year: int) -> Dict[int, Decimal]:
        """Hours logged per calendar month (1..12) of `year`."""
        hours = {month: ZERO_HOURS for month in range(1, 13)}
        for time_log in time_logs:
            if time_log.date.year == year:
                hours[time_log.date.month] += time_log.hours
        return hours

    def pending_invoices_total(self, invoices: Iterable[Invoice]) -> Money:
        return self._sum_invoices(invoice for invoice in invoices if invoice.status in OUTSTANDING_STATUSES)

    def dashboard_summary(
        self,
        engagements: Iterable[Engagement],
        time_logs: Iterable[TimeLog],
        invoices: Iterable[Invoice],
        year: int,
        now: Union[date, datetime]
    ) -> DashboardSummary:
        invoices = list(invoices)
        return DashboardSummary(
            year=year,
            ytd_revenue=self.ytd_revenue(invoices, year, now),
            active_engagements_count=self.status_resolver.count_active(engagements, now),
            monthly_hours=self.monthly_hours(time_logs, year),
            pending_invoices_total=self.pending_invoices_total(invoices),
        )

    def monthly_revenue(
        self,
        time_logs: Iterable[TimeLog],
        invoices: Iterable[Invoice],
        year: int
    ) -> List[MonthlyRevenue]:
        """Twelve rows of paid revenue by issue month plus hours logged."""
        revenue = defaultdict(list)
        for invoice in invoices:
            if invoice.status == InvoiceStatus.PAID and invoice.issue_date.year == year:
                revenue[invoice.issue_date.month].append(invoice.total_amount)

        hours = self.monthly_hours(time_logs, year)
        return [
            MonthlyRevenue(
                month=month,
                revenue=Money(sum(revenue[month], Decimal("0")), self.currency),
                hours=hours[month],
            )
            for month in range(1, 13)
        ]

    def client_rollups(
        self,
        clients: Iterable[Client],
        engagements: Iterable[Engagement],
        time_logs: Iterable[TimeLog],
        invoices: Iterable[Invoice],
        now: Union[date, datetime],
        period: Optional[DateRange] = None
    ) -> List[ClientRollup]:
        """
        Per-client totals. When a period is given, time logs are counted by
        log date and invoices by issue date within it.
        """
        period = period or DateRange.unbounded()
        rollups = {
            client.id: ClientRollup(
                client_id=client.id,
                client_name=client.name,
                total_invoiced=Money.zero(self.currency),
                outstanding_total=Money.zero(self.currency),
            )
            for client in clients
        }

        engagement_clients = {}
        for engagement, status in self.status_resolver.annotate(engagements, now):
            engagement_clients[engagement.id] = engagement.client_id
            rollup = rollups.get(engagement.client_id)
            if rollup is None:
                continue
            rollup.engagement_count += 1
            if status == EngagementStatus.ACTIVE:
                rollup.active_engagement_count += 1

        for time_log in time_logs:
            rollup = rollups.get(engagement_clients.get(time_log.engagement_id))
            if rollup is not None and period.contains(time_log.date):
                rollup.total_hours += time_log.hours

        for invoice in invoices:
            rollup = rollups.get(invoice.client_id)
            if rollup is None or not period.contains(invoice.issue_date):
                continue
            rollup.total_invoiced = Money(rollup.total_invoiced.amount + invoice.total_amount, self.currency)
            if invoice.is_outstanding:
                rollup.outstanding_total = Money(rollup.outstanding_total.amount + invoice.total_amount, self.currency)

        return sorted(rollups.values(), key=lambda rollup: (rollup.client_name or "").lower())

    def time_log_summary(
        self,
        time_logs: Iterable[TimeLog],
        engagements: Dict[int, Engagement]
    ) -> TimeLogSummary:
        """
        Total hours, billable amount of hourly logs, and average hours per
        distinct logged day.
        """
        time_logs = list(time_logs)
        total_hours = sum((time_log.hours for time_log in time_logs), ZERO_HOURS)
        days = {time_log.date for time_log in time_logs}

        average = ZERO_HOURS
        if days:
            average = (total_hours / len(days)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        return TimeLogSummary(
            total_hours=total_hours,
            billable_amount=self.calculator.billable_total(time_logs, engagements),
            average_daily_hours=average,
            days_logged=len(days),
            entry_count=len(time_logs),
        )

    def invoice_summary(self, invoices: Iterable[Invoice]) -> InvoiceSummary:
        invoices = list(invoices)
        total = self._sum_invoices(invoices)
        paid = self._sum_invoices(invoice for invoice in invoices if invoice.status == InvoiceStatus.PAID)
        outstanding = self.pending_invoices_total(invoices)

        return InvoiceSummary(
            invoice_count=len(invoices),
            total_invoiced=total,
            paid_total=paid,
            outstanding_total=outstanding,
            paid_percentage=_percentage(paid.amount, total.amount),
            outstanding_percentage=_percentage(outstanding.amount, total.amount),
        )
