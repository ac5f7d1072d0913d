"""
Invoice DTOs for the application layer.
Totals are always derived from line items and never accepted as input.
"""

from typing import Optional, List
import datetime as dt
from datetime import datetime, date
from decimal import Decimal
from pydantic import Field

from consultdesk.domain.models.invoice import Invoice, InvoiceLineItem, InvoiceStatus
from consultdesk.domain.services.reporting_service import InvoiceSummary
from .base_dto import BaseDTO, CreateRequestDTO, UpdateRequestDTO, ResponseDTO, DateRangeFilterDTO, MoneyDTO
from .client_dto import BillingContactDTO


class GenerateInvoiceRequestDTO(CreateRequestDTO):
    """DTO for generating an invoice from an engagement's time logs."""

    engagement_id: int = Field(gt=0)
    period_start: date = Field(description="Inclusive billing period start")
    period_end: date = Field(description="Inclusive billing period end")
    issue_date: Optional[date] = Field(default=None, description="Defaults to today")
    milestone_amount: Optional[Decimal] = Field(
        default=None, gt=0, decimal_places=2, description="Partial amount for project engagements"
    )
    notes: Optional[str] = Field(default=None, max_length=2000)


class ChangeInvoiceStatusRequestDTO(UpdateRequestDTO):
    """DTO for an invoice status transition."""

    status: str = Field(description="pending, submitted, paid or overdue")


class ListInvoicesRequestDTO(DateRangeFilterDTO):
    """Filters for listing invoices; the range applies to the issue date."""

    status: Optional[str] = None
    client_id: Optional[int] = None
    engagement_id: Optional[int] = None


class InvoiceLineItemResponseDTO(BaseDTO):
    """DTO for invoice line items."""

    line_id: str
    time_log_id: Optional[int] = None
    date: dt.date
    hours: Decimal
    description: str
    rate: Decimal
    amount: Decimal

    @classmethod
    def from_domain(cls, item: InvoiceLineItem) -> "InvoiceLineItemResponseDTO":
        return cls(
            line_id=item.line_id,
            time_log_id=item.time_log_id,
            date=item.date,
            hours=item.hours,
            description=item.description,
            rate=item.rate,
            amount=item.amount,
        )


class InvoiceResponseDTO(ResponseDTO):
    """DTO for invoice responses."""

    invoice_number: str
    client_id: int
    engagement_id: Optional[int] = None
    status: InvoiceStatus
    issue_date: date
    due_date: date
    net_terms: int
    period_start: date
    period_end: date
    currency: str
    total_amount: Decimal
    total_hours: Decimal
    notes: Optional[str] = None
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    billing_contact: BillingContactDTO
    last_status_change_at: Optional[datetime] = None
    line_items: List[InvoiceLineItemResponseDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponseDTO":
        return cls(
            id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_id=invoice.client_id,
            engagement_id=invoice.engagement_id,
            status=invoice.status,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            net_terms=invoice.net_terms,
            period_start=invoice.period_start,
            period_end=invoice.period_end,
            currency=invoice.currency.value,
            total_amount=invoice.total_amount,
            total_hours=invoice.total_hours,
            notes=invoice.notes,
            client_name=invoice.client_name,
            project_name=invoice.project_name,
            billing_contact=BillingContactDTO.from_domain(invoice.billing_contact),
            last_status_change_at=invoice.last_status_change_at,
            line_items=[InvoiceLineItemResponseDTO.from_domain(item) for item in invoice.line_items],
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class InvoiceStatusChangeResponseDTO(BaseDTO):
    """Result of a status transition."""

    invoice_id: int
    previous_status: InvoiceStatus
    status: InvoiceStatus
    last_status_change_at: datetime


class RecommendedStatusResponseDTO(BaseDTO):
    """Advisory status; the stored status is not changed."""

    invoice_id: int
    status: InvoiceStatus
    recommended_status: InvoiceStatus
    is_overdue: bool
    due_date: date
    evaluated_on: date


class InvoiceSummaryResponseDTO(BaseDTO):
    """Totals for a filtered set of invoices."""

    label: str
    invoice_count: int
    total_invoiced: MoneyDTO
    paid_total: MoneyDTO
    outstanding_total: MoneyDTO
    paid_percentage: Decimal
    outstanding_percentage: Decimal

    @classmethod
    def from_domain(cls, summary: InvoiceSummary, label: str) -> "InvoiceSummaryResponseDTO":
        return cls(
            label=label,
            invoice_count=summary.invoice_count,
            total_invoiced=MoneyDTO.from_domain(summary.total_invoiced),
            paid_total=MoneyDTO.from_domain(summary.paid_total),
            outstanding_total=MoneyDTO.from_domain(summary.outstanding_total),
            paid_percentage=summary.paid_percentage,
            outstanding_percentage=summary.outstanding_percentage,
        )
