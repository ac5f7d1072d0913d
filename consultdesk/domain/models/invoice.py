"""
Invoice domain model.
Represents invoices generated from time logs and engagement contracts.

Totals are never stored independently: total_amount and total_hours are
always recomputed from the line items, and line items cannot change after
the invoice is created (delete and regenerate instead).
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Iterable

from consultdesk.domain.models.base import AggregateRoot, ValidationError
from consultdesk.domain.models.engagement import BillingMode
from consultdesk.domain.models.value_objects import (
    BillingContact,
    Currency,
    DateRange,
    Money,
)


class InvoiceStatus(str, Enum):
    """Invoice status."""
    PENDING = "pending"
    SUBMITTED = "submitted"
    PAID = "paid"
    OVERDUE = "overdue"

    @classmethod
    def parse(cls, value) -> "InvoiceStatus":
        """Parse a status string, rejecting anything outside the known set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(status.value for status in cls)
            raise ValidationError(f"Unknown invoice status '{value}' (expected one of: {allowed})", "status")


OUTSTANDING_STATUSES = frozenset({
    InvoiceStatus.PENDING,
    InvoiceStatus.SUBMITTED,
    InvoiceStatus.OVERDUE,
})


@dataclass(frozen=True)
class InvoiceLineItem:
    """
    One row of an invoice.
    time_log_id back-references the source time log for traceability only.
    """

    line_id: str
    date: date
    hours: Decimal
    description: str
    rate: Decimal
    amount: Decimal
    time_log_id: Optional[int] = None

    def __post_init__(self):
        if self.hours < 0:
            raise ValidationError("Hours cannot be negative", "hours")

        if self.amount < 0:
            raise ValidationError("Amount cannot be negative", "amount")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "line_id": self.line_id,
            "time_log_id": self.time_log_id,
            "date": self.date.isoformat(),
            "hours": str(self.hours),
            "description": self.description,
            "rate": str(self.rate),
            "amount": str(self.amount),
        }


def _sum_amount(items: Iterable[InvoiceLineItem]) -> Decimal:
    return sum((item.amount for item in items), Decimal("0.00"))


def _sum_hours(items: Iterable[InvoiceLineItem]) -> Decimal:
    return sum((item.hours for item in items), Decimal("0"))


@dataclass(frozen=True)
class InvoiceDraft:
    """
    Output of invoice aggregation, before an id, number and dates are
    assigned. Totals are derived from line_items.
    """

    engagement_id: int
    client_id: int
    billing_mode: BillingMode
    period: DateRange
    line_items: Tuple[InvoiceLineItem, ...]
    currency: Currency = Currency.USD

    @property
    def total_amount(self) -> Decimal:
        return _sum_amount(self.line_items)

    @property
    def total_hours(self) -> Decimal:
        return _sum_hours(self.line_items)

    @property
    def total(self) -> Money:
        return Money(self.total_amount, self.currency)

    @property
    def time_log_ids(self) -> Tuple[int, ...]:
        return tuple(item.time_log_id for item in self.line_items if item.time_log_id is not None)


@dataclass(eq=False)
class Invoice(AggregateRoot):
    """
    Invoice aggregate root.
    Status is mutated only through InvoiceLifecycle (see apply_status).
    """

    owner_id: str
    client_id: int
    invoice_number: str
    issue_date: date
    due_date: date
    period_start: date
    period_end: date
    engagement_id: Optional[int] = None
    net_terms: int = 30
    status: InvoiceStatus = InvoiceStatus.PENDING
    notes: Optional[str] = None
    line_items: Tuple[InvoiceLineItem, ...] = field(default_factory=tuple)
    currency: Currency = Currency.USD
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    billing_contact: BillingContact = field(default_factory=BillingContact)
    last_status_change_at: Optional[datetime] = None

    def __post_init__(self):
        self.status = InvoiceStatus.parse(self.status)
        self.line_items = tuple(self.line_items)
        if not isinstance(self.currency, Currency):
            self.currency = Currency(self.currency)
        self.validate()

    @classmethod
    def from_draft(
        cls,
        draft: InvoiceDraft,
        owner_id: str,
        invoice_number: str,
        issue_date: date,
        net_terms: int,
        notes: Optional[str] = None,
        client_name: Optional[str] = None,
        project_name: Optional[str] = None,
        billing_contact: Optional[BillingContact] = None,
        created_at: Optional[datetime] = None
    ) -> "Invoice":
        """
        Turn an aggregation draft into a new invoice. The due date follows
        from the net terms and the initial status is always pending.
        """
        created_at = created_at or datetime.utcnow()
        return cls(
            owner_id=owner_id,
            client_id=draft.client_id,
            engagement_id=draft.engagement_id,
            invoice_number=invoice_number,
            issue_date=issue_date,
            due_date=issue_date + timedelta(days=net_terms),
            net_terms=net_terms,
            period_start=draft.period.start,
            period_end=draft.period.end,
            status=InvoiceStatus.PENDING,
            notes=notes,
            line_items=draft.line_items,
            currency=draft.currency,
            client_name=client_name,
            project_name=project_name,
            billing_contact=billing_contact or BillingContact(),
            last_status_change_at=created_at,
            created_at=created_at,
            updated_at=created_at,
        )

    @property
    def total_amount(self) -> Decimal:
        return _sum_amount(self.line_items)

    @property
    def total_hours(self) -> Decimal:
        return _sum_hours(self.line_items)

    @property
    def total(self) -> Money:
        return Money(self.total_amount, self.currency)

    @property
    def period(self) -> DateRange:
        return DateRange(self.period_start, self.period_end)

    @property
    def is_outstanding(self) -> bool:
        return self.status in OUTSTANDING_STATUSES

    def validate(self) -> None:
        """Validate invoice state."""
        if not self.owner_id:
            raise ValidationError("Owner is required", "owner_id")

        if not self.client_id:
            raise ValidationError("Client ID is required", "client_id")

        if not self.invoice_number:
            raise ValidationError("Invoice number is required", "invoice_number")

        if self.due_date < self.issue_date:
            raise ValidationError("Due date cannot be before issue date", "due_date")

        if self.period_end < self.period_start:
            raise ValidationError("Billing period end cannot be before its start", "period_end")

        if self.net_terms < 1:
            raise ValidationError("Net terms must be at least 1 day", "net_terms")

    def apply_status(self, status: InvoiceStatus, changed_at: datetime) -> None:
        """Record a status change. Only InvoiceLifecycle should call this."""
        self.status = status
        self.last_status_change_at = changed_at
        self.updated_at = changed_at
