"""
Dashboard use cases.
Each one loads the tenant's records once and hands them to the reporting
service; nothing here is cached.
"""

from typing import List, Optional

from consultdesk.application.use_cases.base_use_case import (
    AuthorizedUseCase, ClockedUseCase, QueryUseCase
)
from consultdesk.application.dto.base_dto import DateRangeFilterDTO
from consultdesk.application.dto.client_dto import ClientRollupResponseDTO
from consultdesk.application.dto.dashboard_dto import (
    DashboardRequestDTO, DashboardStatsResponseDTO,
    MonthlyRevenueResponseDTO, MonthlyRevenueSeriesResponseDTO
)
from consultdesk.config import get_settings
from consultdesk.domain.repositories.client_repository import ClientRepository
from consultdesk.domain.repositories.engagement_repository import EngagementRepository
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository
from consultdesk.domain.repositories.time_log_repository import TimeLogRepository
from consultdesk.domain.services.billing_service import BillableAmountCalculator
from consultdesk.domain.services.reporting_service import ClientAggregationReporting


class DashboardUseCase(AuthorizedUseCase, ClockedUseCase, QueryUseCase):
    """Common wiring for dashboard queries."""

    def __init__(
        self,
        engagement_repository: EngagementRepository,
        time_log_repository: TimeLogRepository,
        invoice_repository: InvoiceRepository,
        reporting: Optional[ClientAggregationReporting] = None
    ):
        super().__init__()
        self.engagement_repository = engagement_repository
        self.time_log_repository = time_log_repository
        self.invoice_repository = invoice_repository
        self.reporting = reporting or ClientAggregationReporting(
            calculator=BillableAmountCalculator(get_settings().default_currency)
        )

    def _year(self, request: Optional[DashboardRequestDTO]) -> int:
        if request is not None and request.year:
            return request.year
        return self.today().year


class GetDashboardStatsUseCase(DashboardUseCase):
    """YTD revenue, active engagements, hours per month and pending invoices."""

    async def _execute_business_logic(self, request: Optional[DashboardRequestDTO]) -> DashboardStatsResponseDTO:
        owner_id = self.current_user_id
        summary = self.reporting.dashboard_summary(
            self.engagement_repository.get_by_owner(owner_id),
            self.time_log_repository.get_by_owner(owner_id),
            self.invoice_repository.get_by_owner(owner_id),
            year=self._year(request),
            now=self.now(),
        )
        return DashboardStatsResponseDTO.from_domain(summary)


class GetMonthlyRevenueUseCase(DashboardUseCase):
    """Paid revenue and hours for each month of a year."""

    async def _execute_business_logic(self, request: Optional[DashboardRequestDTO]) -> MonthlyRevenueSeriesResponseDTO:
        owner_id = self.current_user_id
        year = self._year(request)
        rows = self.reporting.monthly_revenue(
            self.time_log_repository.get_by_owner(owner_id),
            self.invoice_repository.get_by_owner(owner_id),
            year,
        )
        return MonthlyRevenueSeriesResponseDTO(
            year=year,
            months=[MonthlyRevenueResponseDTO.from_domain(row) for row in rows],
        )


class GetClientRollupsUseCase(DashboardUseCase):
    """Per-client engagement counts, hours and invoice totals."""

    def __init__(
        self,
        client_repository: ClientRepository,
        engagement_repository: EngagementRepository,
        time_log_repository: TimeLogRepository,
        invoice_repository: InvoiceRepository,
        reporting: Optional[ClientAggregationReporting] = None
    ):
        super().__init__(engagement_repository, time_log_repository, invoice_repository, reporting)
        self.client_repository = client_repository

    async def _execute_business_logic(self, request: DateRangeFilterDTO) -> List[ClientRollupResponseDTO]:
        owner_id = self.current_user_id
        period = self.resolve_range(
            request.date_range, request.start_date, request.end_date, request.reference_date
        )
        rollups = self.reporting.client_rollups(
            self.client_repository.get_by_owner(owner_id),
            self.engagement_repository.get_by_owner(owner_id),
            self.time_log_repository.get_by_owner(owner_id),
            self.invoice_repository.get_by_owner(owner_id),
            now=self.now(),
            period=period,
        )
        return [ClientRollupResponseDTO.from_domain(rollup) for rollup in rollups]
