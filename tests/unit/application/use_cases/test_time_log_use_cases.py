"""
Unit tests for time log and dashboard use cases.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from consultdesk.application.dto.base_dto import DateRangeFilterDTO
from consultdesk.application.dto.dashboard_dto import DashboardRequestDTO
from consultdesk.application.dto.time_log_dto import (
    CreateTimeLogRequestDTO,
    ListTimeLogsRequestDTO,
    UpdateTimeLogRequestDTO,
)
from consultdesk.application.use_cases.dashboard_use_cases import (
    GetClientRollupsUseCase,
    GetDashboardStatsUseCase,
    GetMonthlyRevenueUseCase,
)
from consultdesk.application.use_cases.date_range_use_cases import ResolveDateRangeUseCase
from consultdesk.application.use_cases.time_log_use_cases import (
    CreateTimeLogUseCase,
    DeleteTimeLogUseCase,
    ListTimeLogsUseCase,
    TimeLogSummaryUseCase,
    UpdateTimeLogCommand,
    UpdateTimeLogUseCase,
)


OWNER = "user-123"
AUGUST = datetime(2025, 8, 1, 10, 0)


class TestTimeLogUseCases:
    """Test cases for time log use cases."""

    @pytest.mark.asyncio
    async def test_create_returns_billable_amount(self, time_log_repository, engagement_repository):
        create = CreateTimeLogUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await create.execute(CreateTimeLogRequestDTO(
            engagement_id=10, date=date(2025, 3, 10), hours=Decimal("2.5"), description="Workshop",
        ))

        assert result.success is True
        assert result.data.billable_amount.amount == Decimal("250.00")

    @pytest.mark.asyncio
    async def test_create_project_log_is_worth_zero(self, time_log_repository, engagement_repository):
        create = CreateTimeLogUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await create.execute(CreateTimeLogRequestDTO(
            engagement_id=20, date=date(2025, 3, 10), hours=Decimal("3"),
        ))

        assert result.data.billable_amount.amount == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_create_too_many_hours(self, time_log_repository, engagement_repository):
        create = CreateTimeLogUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await create.execute(CreateTimeLogRequestDTO(
            engagement_id=10, date=date(2025, 3, 10), hours=Decimal("9"),
        ))

        assert result.error_code == "VALIDATION_ERROR"
        assert result.metadata["field"] == "hours"

    @pytest.mark.asyncio
    async def test_create_for_unknown_engagement(self, time_log_repository, engagement_repository):
        create = CreateTimeLogUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await create.execute(CreateTimeLogRequestDTO(
            engagement_id=99, date=date(2025, 3, 10), hours=Decimal("1"),
        ))

        assert result.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update(self, time_log_repository, engagement_repository):
        update = UpdateTimeLogUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await update.execute(UpdateTimeLogCommand(1, UpdateTimeLogRequestDTO(hours=Decimal("6"))))

        assert result.data.hours == Decimal("6")
        assert result.data.billable_amount.amount == Decimal("600.00")
        assert result.data.engagement_id == 10

    @pytest.mark.asyncio
    async def test_list_filters_by_engagement_and_range(self, time_log_repository, engagement_repository):
        list_use_case = ListTimeLogsUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await list_use_case.execute(ListTimeLogsRequestDTO(
            engagement_id=10, date_range="month", reference_date=date(2025, 3, 15),
        ))

        assert [time_log.id for time_log in result.data] == [1, 2]

    @pytest.mark.asyncio
    async def test_summary(self, time_log_repository, engagement_repository):
        summary = TimeLogSummaryUseCase(time_log_repository, engagement_repository).set_current_user(OWNER)

        result = await summary.execute(ListTimeLogsRequestDTO(
            date_range="month", reference_date=date(2025, 3, 15),
        ))

        assert result.data.label == "March 2025"
        assert result.data.total_hours == Decimal("13")
        assert result.data.billable_amount.amount == Decimal("700.00")
        assert result.data.days_logged == 3
        assert result.data.entry_count == 3

    @pytest.mark.asyncio
    async def test_delete(self, time_log_repository):
        delete = DeleteTimeLogUseCase(time_log_repository).set_current_user(OWNER)

        result = await delete.execute(3)
        missing = await delete.execute(3)

        assert result.data is True
        assert missing.error_code == "ENTITY_NOT_FOUND"


class TestDashboardUseCases:
    """Test cases for dashboard use cases."""

    @pytest.mark.asyncio
    async def test_stats(self, engagement_repository, time_log_repository, invoice_repository):
        stats = GetDashboardStatsUseCase(
            engagement_repository, time_log_repository, invoice_repository
        ).set_current_user(OWNER)
        stats.clock = lambda: AUGUST

        result = await stats.execute(DashboardRequestDTO())

        assert result.data.year == 2025
        assert result.data.active_engagements_count == 1
        assert result.data.monthly_hours[3] == Decimal("13")
        assert result.data.monthly_hours[4] == Decimal("5")
        assert result.data.ytd_revenue.amount == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_monthly_revenue_for_explicit_year(self, engagement_repository, time_log_repository, invoice_repository):
        monthly = GetMonthlyRevenueUseCase(
            engagement_repository, time_log_repository, invoice_repository
        ).set_current_user(OWNER)

        result = await monthly.execute(DashboardRequestDTO(year=2024))

        assert result.data.year == 2024
        assert len(result.data.months) == 12
        assert all(row.hours == Decimal("0") for row in result.data.months)

    @pytest.mark.asyncio
    async def test_client_rollups(
        self, client_repository, engagement_repository, time_log_repository, invoice_repository
    ):
        rollups = GetClientRollupsUseCase(
            client_repository, engagement_repository, time_log_repository, invoice_repository
        ).set_current_user(OWNER)
        rollups.clock = lambda: AUGUST

        result = await rollups.execute(DateRangeFilterDTO())

        assert len(result.data) == 1
        acme = result.data[0]
        assert acme.client_name == "Acme Corp"
        assert acme.engagement_count == 2
        assert acme.active_engagement_count == 1
        assert acme.total_hours == Decimal("18")


class TestResolveDateRangeUseCase:
    """Test cases for the date range resolution endpoint logic."""

    @pytest.mark.asyncio
    async def test_quarter(self):
        result = await ResolveDateRangeUseCase().execute(DateRangeFilterDTO(
            date_range="quarter", reference_date=date(2025, 5, 20),
        ))

        assert result.data.start == date(2025, 4, 1)
        assert result.data.end == date(2025, 6, 30)
        assert result.data.label == "Q2 2025"

    @pytest.mark.asyncio
    async def test_unknown_token(self):
        result = await ResolveDateRangeUseCase().execute(DateRangeFilterDTO(date_range="fortnight"))

        assert result.error_code == "UNKNOWN_RANGE_TOKEN"
