"""
Invoice lifecycle.
Status changes go through a transition policy so a stricter state machine
can be swapped in without touching callers. The default policy accepts any
status to any other status, matching how invoices are corrected manually.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Dict, FrozenSet, Optional, Union

from consultdesk.domain.models.base import BusinessRuleViolation
from consultdesk.domain.models.invoice import Invoice, InvoiceStatus


class TransitionPolicy(ABC):
    """Decides whether a status change is allowed."""

    @abstractmethod
    def allows(self, current: InvoiceStatus, requested: InvoiceStatus) -> bool:
        pass


class PermissiveTransitionPolicy(TransitionPolicy):
    """Any status to any status."""

    def allows(self, current: InvoiceStatus, requested: InvoiceStatus) -> bool:
        return True


class StrictTransitionPolicy(TransitionPolicy):
    """
    Forward-only workflow: pending -> submitted -> paid, with overdue
    reachable from submitted and payable from overdue.
    """

    allowed: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {
        InvoiceStatus.PENDING: frozenset({InvoiceStatus.SUBMITTED}),
        InvoiceStatus.SUBMITTED: frozenset({InvoiceStatus.PAID, InvoiceStatus.OVERDUE}),
        InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID}),
        InvoiceStatus.PAID: frozenset(),
    }

    def allows(self, current: InvoiceStatus, requested: InvoiceStatus) -> bool:
        return current == requested or requested in self.allowed[current]


class InvoiceLifecycle:
    """State machine over pending, submitted, paid and overdue."""

    def __init__(self, policy: Optional[TransitionPolicy] = None):
        self.policy = policy or PermissiveTransitionPolicy()

    def transition_status(
        self,
        current: Union[InvoiceStatus, str],
        requested: Union[InvoiceStatus, str]
    ) -> InvoiceStatus:
        """
        Pure transition function. Unknown status strings raise
        ValidationError; a refused transition raises BusinessRuleViolation.
        """
        current = InvoiceStatus.parse(current)
        requested = InvoiceStatus.parse(requested)

        if not self.policy.allows(current, requested):
            raise BusinessRuleViolation(
                f"Cannot change invoice status from {current.value} to {requested.value}"
            )
        return requested

    def transition(
        self,
        invoice: Invoice,
        requested: Union[InvoiceStatus, str],
        changed_at: Optional[datetime] = None
    ) -> InvoiceStatus:
        """
        Apply a status change to an invoice. Only the status and its change
        timestamp are touched; line items and totals never change here.
        Returns the previous status.
        """
        previous = invoice.status
        new_status = self.transition_status(previous, requested)
        invoice.apply_status(new_status, changed_at or datetime.utcnow())
        return previous

    def recommended_status(self, invoice: Invoice, now: Union[date, datetime]) -> InvoiceStatus:
        """
        Advisory status: overdue once the due date has passed and the invoice
        is not paid. Never mutates the invoice.
        """
        today = now.date() if isinstance(now, datetime) else now
        if invoice.status != InvoiceStatus.PAID and today > invoice.due_date:
            return InvoiceStatus.OVERDUE
        return invoice.status

    def is_overdue(self, invoice: Invoice, now: Union[date, datetime]) -> bool:
        return self.recommended_status(invoice, now) == InvoiceStatus.OVERDUE
