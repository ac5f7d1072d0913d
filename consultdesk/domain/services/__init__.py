"""
Domain services for the billing and invoice aggregation engine.
Pure computations over explicit inputs; no I/O and no wall-clock reads.
"""

from .date_range_service import DateRangeResolver, DateRangeToken, format_date_range
from .engagement_status_service import EngagementStatusResolver
from .billing_service import BillableAmountCalculator
from .invoice_aggregation_service import InvoiceAggregator
from .invoice_lifecycle_service import (
    InvoiceLifecycle,
    PermissiveTransitionPolicy,
    StrictTransitionPolicy,
    TransitionPolicy,
)
from .numbering_service import NumberingService
from .reporting_service import ClientAggregationReporting

__all__ = [
    "DateRangeResolver",
    "DateRangeToken",
    "format_date_range",
    "EngagementStatusResolver",
    "BillableAmountCalculator",
    "InvoiceAggregator",
    "InvoiceLifecycle",
    "TransitionPolicy",
    "PermissiveTransitionPolicy",
    "StrictTransitionPolicy",
    "NumberingService",
    "ClientAggregationReporting",
]
