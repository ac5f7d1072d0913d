"""
Domain events for the billing engine.
"""

from .base import DomainEvent, EventHandler, EventDispatcher, get_event_dispatcher, publish_event
from .invoice_events import InvoiceGenerated, InvoiceStatusChanged, InvoiceDeleted

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "get_event_dispatcher",
    "publish_event",
    "InvoiceGenerated",
    "InvoiceStatusChanged",
    "InvoiceDeleted",
]
