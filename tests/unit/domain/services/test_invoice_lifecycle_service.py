"""
Unit tests for InvoiceLifecycle domain service.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from consultdesk.domain.models.base import BusinessRuleViolation, ValidationError
from consultdesk.domain.models.invoice import Invoice, InvoiceLineItem, InvoiceStatus
from consultdesk.domain.services.invoice_lifecycle_service import (
    InvoiceLifecycle,
    StrictTransitionPolicy,
)


@pytest.fixture
def invoice():
    return Invoice(
        id=1,
        owner_id="user-123",
        client_id=1,
        engagement_id=10,
        invoice_number="INV-000001",
        issue_date=date(2025, 4, 1),
        due_date=date(2025, 5, 1),
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
        line_items=(
            InvoiceLineItem(
                line_id="timelog-1",
                time_log_id=1,
                date=date(2025, 3, 1),
                hours=Decimal("4"),
                description="Consulting services",
                rate=Decimal("100"),
                amount=Decimal("400.00"),
            ),
        ),
    )


class TestInvoiceLifecycle:
    """Test cases for the default invoice lifecycle."""

    def setup_method(self):
        self.lifecycle = InvoiceLifecycle()

    @pytest.mark.parametrize("current", list(InvoiceStatus))
    @pytest.mark.parametrize("requested", list(InvoiceStatus))
    def test_any_transition_is_allowed(self, current, requested):
        assert self.lifecycle.transition_status(current, requested) == requested

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            self.lifecycle.transition_status("pending", "void")

    def test_transition_updates_status_only(self, invoice):
        changed_at = datetime(2025, 4, 5, 10, 0)

        previous = self.lifecycle.transition(invoice, "submitted", changed_at)

        assert previous == InvoiceStatus.PENDING
        assert invoice.status == InvoiceStatus.SUBMITTED
        assert invoice.last_status_change_at == changed_at
        assert invoice.total_amount == Decimal("400.00")
        assert invoice.due_date == date(2025, 5, 1)

    def test_paid_can_be_reopened(self, invoice):
        self.lifecycle.transition(invoice, InvoiceStatus.PAID)
        self.lifecycle.transition(invoice, InvoiceStatus.PENDING)

        assert invoice.status == InvoiceStatus.PENDING

    def test_overdue_is_advisory(self, invoice):
        """Test that a past due date recommends overdue without changing the invoice."""
        recommended = self.lifecycle.recommended_status(invoice, date(2025, 5, 2))

        assert recommended == InvoiceStatus.OVERDUE
        assert invoice.status == InvoiceStatus.PENDING

    def test_not_overdue_on_due_date(self, invoice):
        assert self.lifecycle.recommended_status(invoice, datetime(2025, 5, 1, 23, 0)) == InvoiceStatus.PENDING
        assert not self.lifecycle.is_overdue(invoice, date(2025, 5, 1))

    def test_paid_invoice_is_never_overdue(self, invoice):
        invoice.apply_status(InvoiceStatus.PAID, datetime(2025, 4, 20))

        assert self.lifecycle.recommended_status(invoice, date(2026, 1, 1)) == InvoiceStatus.PAID


class TestStrictTransitionPolicy:
    """Test cases for the forward-only transition policy."""

    def setup_method(self):
        self.lifecycle = InvoiceLifecycle(StrictTransitionPolicy())

    @pytest.mark.parametrize("current,requested", [
        ("pending", "submitted"),
        ("submitted", "paid"),
        ("submitted", "overdue"),
        ("overdue", "paid"),
        ("paid", "paid"),
    ])
    def test_allowed(self, current, requested):
        assert self.lifecycle.transition_status(current, requested) == InvoiceStatus(requested)

    @pytest.mark.parametrize("current,requested", [
        ("pending", "paid"),
        ("paid", "pending"),
        ("overdue", "submitted"),
    ])
    def test_refused(self, current, requested):
        with pytest.raises(BusinessRuleViolation):
            self.lifecycle.transition_status(current, requested)

    def test_refused_transition_leaves_invoice_unchanged(self, invoice):
        with pytest.raises(BusinessRuleViolation):
            self.lifecycle.transition(invoice, InvoiceStatus.PAID)

        assert invoice.status == InvoiceStatus.PENDING
