"""
Unit tests for Invoice domain model.
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from consultdesk.domain.models.base import ValidationError
from consultdesk.domain.models.engagement import BillingMode
from consultdesk.domain.models.invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceLineItem,
    InvoiceStatus,
)
from consultdesk.domain.models.value_objects import DateRange, Money


def line(line_id, day, hours, amount, time_log_id=None):
    return InvoiceLineItem(
        line_id=line_id,
        date=day,
        hours=Decimal(hours),
        description="Consulting services",
        rate=Decimal("100"),
        amount=Decimal(amount),
        time_log_id=time_log_id,
    )


@pytest.fixture
def draft():
    return InvoiceDraft(
        engagement_id=10,
        client_id=1,
        billing_mode=BillingMode.HOURLY,
        period=DateRange(date(2025, 3, 1), date(2025, 3, 31)),
        line_items=(
            line("timelog-1", date(2025, 3, 1), "4", "400.00", 1),
            line("timelog-2", date(2025, 3, 2), "3", "300.00", 2),
        ),
    )


class TestInvoiceStatus:
    """Test cases for InvoiceStatus parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("pending", InvoiceStatus.PENDING),
        ("PAID", InvoiceStatus.PAID),
        (" overdue ", InvoiceStatus.OVERDUE),
        (InvoiceStatus.SUBMITTED, InvoiceStatus.SUBMITTED),
    ])
    def test_parse(self, value, expected):
        assert InvoiceStatus.parse(value) == expected

    def test_parse_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            InvoiceStatus.parse("cancelled")

        assert exc_info.value.field == "status"
        assert "cancelled" in exc_info.value.message


class TestInvoiceLineItem:
    """Test cases for InvoiceLineItem."""

    def test_negative_amount_is_rejected(self):
        with pytest.raises(ValidationError):
            line("line-1", date(2025, 3, 1), "1", "-1")

    def test_to_dict(self):
        item = line("timelog-7", date(2025, 3, 1), "2.5", "250.00", 7)

        data = item.to_dict()

        assert data["time_log_id"] == 7
        assert data["date"] == "2025-03-01"
        assert data["hours"] == "2.5"
        assert data["amount"] == "250.00"


class TestInvoice:
    """Test cases for Invoice aggregate."""

    def test_draft_totals_derive_from_lines(self, draft):
        assert draft.total_amount == Decimal("700.00")
        assert draft.total_hours == Decimal("7")
        assert draft.total == Money(Decimal("700"))
        assert draft.time_log_ids == (1, 2)

    def test_from_draft(self, draft):
        created_at = datetime(2025, 4, 1, 9, 30)

        invoice = Invoice.from_draft(
            draft,
            owner_id="user123",
            invoice_number="INV-000001",
            issue_date=date(2025, 4, 1),
            net_terms=30,
            client_name="Acme Corp",
            project_name="Data Platform",
            created_at=created_at,
        )

        assert invoice.status == InvoiceStatus.PENDING
        assert invoice.due_date == date(2025, 5, 1)
        assert invoice.period == draft.period
        assert invoice.total_amount == Decimal("700.00")
        assert invoice.total_hours == Decimal("7")
        assert invoice.last_status_change_at == created_at
        assert invoice.created_at == created_at
        assert invoice.is_outstanding

    def test_due_date_follows_net_terms(self, draft):
        invoice = Invoice.from_draft(
            draft,
            owner_id="user123",
            invoice_number="INV-000002",
            issue_date=date(2025, 4, 1),
            net_terms=15,
        )

        assert invoice.due_date - invoice.issue_date == timedelta(days=15)

    def test_due_before_issue_is_rejected(self):
        with pytest.raises(ValidationError, match="Due date"):
            Invoice(
                owner_id="user123",
                client_id=1,
                invoice_number="INV-000001",
                issue_date=date(2025, 4, 1),
                due_date=date(2025, 3, 1),
                period_start=date(2025, 3, 1),
                period_end=date(2025, 3, 31),
            )

    def test_apply_status(self, draft):
        invoice = Invoice.from_draft(
            draft,
            owner_id="user123",
            invoice_number="INV-000001",
            issue_date=date(2025, 4, 1),
            net_terms=30,
        )
        changed_at = datetime(2025, 4, 10, 12, 0)

        invoice.apply_status(InvoiceStatus.PAID, changed_at)

        assert invoice.status == InvoiceStatus.PAID
        assert invoice.last_status_change_at == changed_at
        assert not invoice.is_outstanding
        assert invoice.total_amount == Decimal("700.00")
