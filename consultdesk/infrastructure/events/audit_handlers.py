"""
Event handlers that write an audit trail of invoice activity to the log.
"""

import logging

from consultdesk.domain.events.base import EventHandler, DomainEvent
from consultdesk.domain.events.invoice_events import (
    InvoiceGenerated, InvoiceStatusChanged, InvoiceDeleted
)


logger = logging.getLogger(__name__)


class AuditLogHandler(EventHandler):
    """Global handler: one log line per event."""

    def can_handle(self, event: DomainEvent) -> bool:
        return True

    async def handle(self, event: DomainEvent) -> None:
        logger.info(f"Audit: {event.event_type} (ID: {event.event_id}) at {event.occurred_at.isoformat()}")


class InvoiceActivityHandler(EventHandler):
    """Handler for invoice events, logging what changed for which tenant."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, (InvoiceGenerated, InvoiceStatusChanged, InvoiceDeleted))

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, InvoiceGenerated):
            logger.info(
                f"Invoice {event.invoice_number} generated for engagement {event.engagement_id} "
                f"covering {event.period_start} - {event.period_end}: "
                f"{event.line_item_count} lines, {event.total_hours}h, {event.total_amount}"
            )
        elif isinstance(event, InvoiceStatusChanged):
            logger.info(
                f"Invoice {event.invoice_number} moved from {event.old_status} to {event.new_status} "
                f"(owner {event.owner_id})"
            )
        elif isinstance(event, InvoiceDeleted):
            logger.info(f"Invoice {event.invoice_number} deleted (owner {event.owner_id})")
