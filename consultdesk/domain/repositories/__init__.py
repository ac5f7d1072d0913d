"""
Repository interfaces for the domain layer.
"""

from .client_repository import ClientRepository
from .engagement_repository import EngagementRepository
from .time_log_repository import TimeLogRepository
from .invoice_repository import InvoiceRepository
from .aggregation_lock import AggregationLock

__all__ = [
    "ClientRepository",
    "EngagementRepository",
    "TimeLogRepository",
    "InvoiceRepository",
    "AggregationLock",
]
