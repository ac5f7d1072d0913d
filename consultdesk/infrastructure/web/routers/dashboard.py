"""
Dashboard router.
Aggregates are computed from the tenant's records on every request.
"""

from datetime import date
from typing import Annotated, List, Optional
from fastapi import APIRouter, Query

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import (
    ClientRepositoryDep, EngagementRepositoryDep, InvoiceRepositoryDep, TimeLogRepositoryDep
)
from consultdesk.infrastructure.web.middleware.error_handler import raise_for_result
from consultdesk.application.use_cases.dashboard_use_cases import (
    GetDashboardStatsUseCase,
    GetMonthlyRevenueUseCase,
    GetClientRollupsUseCase
)
from consultdesk.application.dto.base_dto import DateRangeFilterDTO
from consultdesk.application.dto.client_dto import ClientRollupResponseDTO
from consultdesk.application.dto.dashboard_dto import (
    DashboardRequestDTO,
    DashboardStatsResponseDTO,
    MonthlyRevenueSeriesResponseDTO
)


router = APIRouter()

YearParam = Annotated[Optional[int], Query(ge=1900, le=9999, description="Defaults to the current year")]


@router.get("/stats", response_model=DashboardStatsResponseDTO)
async def get_dashboard_stats(
    user_id: CurrentUserId,
    engagement_repository: EngagementRepositoryDep,
    time_log_repository: TimeLogRepositoryDep,
    invoice_repository: InvoiceRepositoryDep,
    year: YearParam = None
):
    """
    Headline metrics for a year.

    - **ytd_revenue**: Paid invoices issued this year up to today
    - **active_engagements_count**: Engagements active today
    - **monthly_hours**: Hours logged per month
    - **pending_invoices_total**: Pending, submitted and overdue invoices
    """
    use_case = GetDashboardStatsUseCase(
        engagement_repository, time_log_repository, invoice_repository
    ).set_current_user(user_id)
    return raise_for_result(await use_case.execute(DashboardRequestDTO(year=year)))


@router.get("/monthly-revenue", response_model=MonthlyRevenueSeriesResponseDTO)
async def get_monthly_revenue(
    user_id: CurrentUserId,
    engagement_repository: EngagementRepositoryDep,
    time_log_repository: TimeLogRepositoryDep,
    invoice_repository: InvoiceRepositoryDep,
    year: YearParam = None
):
    """Paid revenue by issue month and hours logged, for each month of the year."""
    use_case = GetMonthlyRevenueUseCase(
        engagement_repository, time_log_repository, invoice_repository
    ).set_current_user(user_id)
    return raise_for_result(await use_case.execute(DashboardRequestDTO(year=year)))


@router.get("/clients", response_model=List[ClientRollupResponseDTO])
async def get_client_rollups(
    user_id: CurrentUserId,
    client_repository: ClientRepositoryDep,
    engagement_repository: EngagementRepositoryDep,
    time_log_repository: TimeLogRepositoryDep,
    invoice_repository: InvoiceRepositoryDep,
    year: YearParam = None,
    date_range: str = Query("all", description="Range token; ignored when year is given"),
    start_date: Optional[date] = Query(None, description="Custom range start"),
    end_date: Optional[date] = Query(None, description="Custom range end"),
    reference_date: Optional[date] = Query(None, description="Resolve the range relative to this date")
):
    """
    Per-client engagement counts, hours and invoice totals. Hours count by
    log date and invoices by issue date within the selected range.
    """
    if year is not None:
        filters = DateRangeFilterDTO(
            date_range="custom",
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
        )
    else:
        filters = DateRangeFilterDTO(
            date_range=date_range,
            start_date=start_date,
            end_date=end_date,
            reference_date=reference_date,
        )

    use_case = GetClientRollupsUseCase(
        client_repository, engagement_repository, time_log_repository, invoice_repository
    ).set_current_user(user_id)
    return raise_for_result(await use_case.execute(filters))
