"""
Event system setup and configuration.
Registers all event handlers with the event dispatcher.
"""

import logging

from consultdesk.domain.events.base import get_event_dispatcher
from .audit_handlers import AuditLogHandler, InvoiceActivityHandler

logger = logging.getLogger(__name__)


def setup_event_handlers():
    """Set up and register all event handlers."""

    dispatcher = get_event_dispatcher()

    # Startup may run more than once per process (tests build several apps)
    dispatcher.clear_handlers()

    dispatcher.register_global_handler(AuditLogHandler())

    invoice_handler = InvoiceActivityHandler()
    dispatcher.register_handler("InvoiceGenerated", invoice_handler)
    dispatcher.register_handler("InvoiceStatusChanged", invoice_handler)
    dispatcher.register_handler("InvoiceDeleted", invoice_handler)

    logger.info("Event handlers registered successfully")

    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.info(f"Event {event_type}: {', '.join(handlers)} handlers")


def initialize_event_system():
    """Initialize the complete event system."""
    try:
        setup_event_handlers()
        logger.info("Event system initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize event system: {str(e)}")
        raise
