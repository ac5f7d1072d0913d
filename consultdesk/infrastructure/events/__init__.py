"""
Infrastructure event handlers.
"""

from .audit_handlers import AuditLogHandler, InvoiceActivityHandler
from .event_setup import setup_event_handlers, initialize_event_system

__all__ = [
    "AuditLogHandler",
    "InvoiceActivityHandler",
    "setup_event_handlers",
    "initialize_event_system",
]
