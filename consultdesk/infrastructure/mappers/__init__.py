"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .client_mapper import ClientMapper
from .engagement_mapper import EngagementMapper
from .time_log_mapper import TimeLogMapper
from .invoice_mapper import InvoiceMapper

__all__ = [
    "ClientMapper",
    "EngagementMapper",
    "TimeLogMapper",
    "InvoiceMapper",
]
