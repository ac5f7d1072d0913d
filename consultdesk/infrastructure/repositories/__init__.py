"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .client_repository import SQLAlchemyClientRepository
from .engagement_repository import SQLAlchemyEngagementRepository
from .time_log_repository import SQLAlchemyTimeLogRepository
from .invoice_repository import SQLAlchemyInvoiceRepository
from .aggregation_lock import SQLAlchemyAggregationLock

__all__ = [
    "SQLAlchemyClientRepository",
    "SQLAlchemyEngagementRepository",
    "SQLAlchemyTimeLogRepository",
    "SQLAlchemyInvoiceRepository",
    "SQLAlchemyAggregationLock",
]
