"""
Domain events related to invoices.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass
from datetime import date

from .base import DomainEvent


@dataclass
class InvoiceGenerated(DomainEvent):
    """Fired when an invoice is generated from an engagement's time logs."""

    invoice_id: int
    owner_id: str
    client_id: int
    engagement_id: Optional[int]
    invoice_number: str
    period_start: date
    period_end: date
    total_amount: str
    total_hours: str
    line_item_count: int

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "invoice_id": self.invoice_id,
            "owner_id": self.owner_id,
            "client_id": self.client_id,
            "engagement_id": self.engagement_id,
            "invoice_number": self.invoice_number,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "total_amount": self.total_amount,
            "total_hours": self.total_hours,
            "line_item_count": self.line_item_count,
        }


@dataclass
class InvoiceStatusChanged(DomainEvent):
    """Fired on every invoice status transition."""

    invoice_id: int
    owner_id: str
    invoice_number: str
    old_status: str
    new_status: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "invoice_id": self.invoice_id,
            "owner_id": self.owner_id,
            "invoice_number": self.invoice_number,
            "old_status": self.old_status,
            "new_status": self.new_status,
        }


@dataclass
class InvoiceDeleted(DomainEvent):
    """Fired when an invoice is deleted. Its time logs are left untouched."""

    invoice_id: int
    owner_id: str
    invoice_number: str

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "invoice_id": self.invoice_id,
            "owner_id": self.owner_id,
            "invoice_number": self.invoice_number,
        }
