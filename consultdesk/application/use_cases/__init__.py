"""
Application layer use cases.
Business logic for clients, engagements, time logs, invoices and dashboards.
"""

from .base_use_case import (
    UseCaseResult,
    BaseUseCase,
    QueryUseCase,
    CommandUseCase,
    CreateUseCase,
    UpdateUseCase,
    DeleteUseCase,
    GetByIdUseCase,
    AuthorizedUseCase,
    ClockedUseCase,
)
from .client_use_cases import (
    UpdateClientCommand,
    CreateClientUseCase,
    UpdateClientUseCase,
    GetClientByIdUseCase,
    ListClientsUseCase,
    DeleteClientUseCase,
)
from .engagement_use_cases import (
    UpdateEngagementCommand,
    CreateEngagementUseCase,
    UpdateEngagementUseCase,
    GetEngagementByIdUseCase,
    ListEngagementsUseCase,
    DeleteEngagementUseCase,
)
from .time_log_use_cases import (
    UpdateTimeLogCommand,
    CreateTimeLogUseCase,
    UpdateTimeLogUseCase,
    GetTimeLogByIdUseCase,
    ListTimeLogsUseCase,
    TimeLogSummaryUseCase,
    DeleteTimeLogUseCase,
)
from .invoice_use_cases import (
    ChangeInvoiceStatusCommand,
    GenerateInvoiceUseCase,
    ChangeInvoiceStatusUseCase,
    GetRecommendedStatusUseCase,
    GetInvoiceByIdUseCase,
    ListInvoicesUseCase,
    InvoiceSummaryUseCase,
    DeleteInvoiceUseCase,
)
from .dashboard_use_cases import (
    GetDashboardStatsUseCase,
    GetMonthlyRevenueUseCase,
    GetClientRollupsUseCase,
)
from .date_range_use_cases import ResolveDateRangeUseCase

__all__ = [
    # Base Use Cases
    "UseCaseResult",
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "CreateUseCase",
    "UpdateUseCase",
    "DeleteUseCase",
    "GetByIdUseCase",
    "AuthorizedUseCase",
    "ClockedUseCase",

    # Client Use Cases
    "UpdateClientCommand",
    "CreateClientUseCase",
    "UpdateClientUseCase",
    "GetClientByIdUseCase",
    "ListClientsUseCase",
    "DeleteClientUseCase",

    # Engagement Use Cases
    "UpdateEngagementCommand",
    "CreateEngagementUseCase",
    "UpdateEngagementUseCase",
    "GetEngagementByIdUseCase",
    "ListEngagementsUseCase",
    "DeleteEngagementUseCase",

    # Time Log Use Cases
    "UpdateTimeLogCommand",
    "CreateTimeLogUseCase",
    "UpdateTimeLogUseCase",
    "GetTimeLogByIdUseCase",
    "ListTimeLogsUseCase",
    "TimeLogSummaryUseCase",
    "DeleteTimeLogUseCase",

    # Invoice Use Cases
    "ChangeInvoiceStatusCommand",
    "GenerateInvoiceUseCase",
    "ChangeInvoiceStatusUseCase",
    "GetRecommendedStatusUseCase",
    "GetInvoiceByIdUseCase",
    "ListInvoicesUseCase",
    "InvoiceSummaryUseCase",
    "DeleteInvoiceUseCase",

    # Dashboard Use Cases
    "GetDashboardStatsUseCase",
    "GetMonthlyRevenueUseCase",
    "GetClientRollupsUseCase",

    # Date Range Use Cases
    "ResolveDateRangeUseCase",
]
