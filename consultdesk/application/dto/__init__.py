"""
Data Transfer Objects for the application layer.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    DateRangeFilterDTO,
    MoneyDTO,
    ListResponseDTO,
    HealthCheckResponseDTO,
    ErrorResponseDTO,
)
from .date_range_dto import DateRangeResponseDTO
from .client_dto import (
    BillingContactDTO,
    CreateClientRequestDTO,
    UpdateClientRequestDTO,
    ClientResponseDTO,
    ClientRollupResponseDTO,
)
from .engagement_dto import (
    CreateEngagementRequestDTO,
    UpdateEngagementRequestDTO,
    ListEngagementsRequestDTO,
    EngagementResponseDTO,
)
from .time_log_dto import (
    CreateTimeLogRequestDTO,
    UpdateTimeLogRequestDTO,
    ListTimeLogsRequestDTO,
    TimeLogResponseDTO,
    TimeLogSummaryResponseDTO,
)
from .invoice_dto import (
    GenerateInvoiceRequestDTO,
    ChangeInvoiceStatusRequestDTO,
    ListInvoicesRequestDTO,
    InvoiceLineItemResponseDTO,
    InvoiceResponseDTO,
    InvoiceStatusChangeResponseDTO,
    RecommendedStatusResponseDTO,
    InvoiceSummaryResponseDTO,
)
from .dashboard_dto import (
    DashboardRequestDTO,
    DashboardStatsResponseDTO,
    MonthlyRevenueResponseDTO,
    MonthlyRevenueSeriesResponseDTO,
)

__all__ = [
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "DateRangeFilterDTO",
    "MoneyDTO",
    "ListResponseDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",
    "DateRangeResponseDTO",
    "BillingContactDTO",
    "CreateClientRequestDTO",
    "UpdateClientRequestDTO",
    "ClientResponseDTO",
    "ClientRollupResponseDTO",
    "CreateEngagementRequestDTO",
    "UpdateEngagementRequestDTO",
    "ListEngagementsRequestDTO",
    "EngagementResponseDTO",
    "CreateTimeLogRequestDTO",
    "UpdateTimeLogRequestDTO",
    "ListTimeLogsRequestDTO",
    "TimeLogResponseDTO",
    "TimeLogSummaryResponseDTO",
    "GenerateInvoiceRequestDTO",
    "ChangeInvoiceStatusRequestDTO",
    "ListInvoicesRequestDTO",
    "InvoiceLineItemResponseDTO",
    "InvoiceResponseDTO",
    "InvoiceStatusChangeResponseDTO",
    "RecommendedStatusResponseDTO",
    "InvoiceSummaryResponseDTO",
    "DashboardRequestDTO",
    "DashboardStatsResponseDTO",
    "MonthlyRevenueResponseDTO",
    "MonthlyRevenueSeriesResponseDTO",
]
