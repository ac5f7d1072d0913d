"""
Unit tests for client and engagement use cases.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from consultdesk.application.dto.client_dto import CreateClientRequestDTO, UpdateClientRequestDTO
from consultdesk.application.dto.engagement_dto import (
    CreateEngagementRequestDTO,
    ListEngagementsRequestDTO,
    UpdateEngagementRequestDTO,
)
from consultdesk.application.use_cases.client_use_cases import (
    CreateClientUseCase,
    DeleteClientUseCase,
    ListClientsUseCase,
    UpdateClientCommand,
    UpdateClientUseCase,
)
from consultdesk.application.use_cases.engagement_use_cases import (
    CreateEngagementUseCase,
    DeleteEngagementUseCase,
    GetEngagementByIdUseCase,
    ListEngagementsUseCase,
    UpdateEngagementCommand,
    UpdateEngagementUseCase,
)
from consultdesk.domain.models.engagement import EngagementStatus


OWNER = "user-123"


def at(moment):
    return lambda: moment


class TestClientUseCases:
    """Test cases for client use cases."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client_repository):
        create = CreateClientUseCase(client_repository).set_current_user(OWNER)

        result = await create.execute(CreateClientRequestDTO(name="  Beta LLC  "))
        listed = await ListClientsUseCase(client_repository).set_current_user(OWNER).execute(None)

        assert result.success is True
        assert result.data.name == "Beta LLC"
        assert [client.name for client in listed.data] == ["Acme Corp", "Beta LLC"]

    @pytest.mark.asyncio
    async def test_duplicate_name(self, client_repository):
        create = CreateClientUseCase(client_repository).set_current_user(OWNER)

        result = await create.execute(CreateClientRequestDTO(name="acme corp"))

        assert result.error_code == "DUPLICATE_ENTITY"

    @pytest.mark.asyncio
    async def test_update(self, client_repository):
        update = UpdateClientUseCase(client_repository).set_current_user(OWNER)

        result = await update.execute(UpdateClientCommand(1, UpdateClientRequestDTO(name="Acme Holdings")))

        assert result.data.name == "Acme Holdings"
        assert result.data.billing_contact.email == "billing@acme.com"

    @pytest.mark.asyncio
    async def test_delete_refused_with_active_engagement(self, client_repository, engagement_repository):
        delete = DeleteClientUseCase(client_repository, engagement_repository).set_current_user(OWNER)
        delete.clock = at(datetime(2025, 3, 1))

        result = await delete.execute(1)

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        assert "active engagement" in result.error

    @pytest.mark.asyncio
    async def test_delete_refused_with_completed_engagements(self, client_repository, engagement_repository):
        delete = DeleteClientUseCase(client_repository, engagement_repository).set_current_user(OWNER)
        delete.clock = at(datetime(2026, 3, 1))

        result = await delete.execute(1)

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        assert "delete them first" in result.error

    @pytest.mark.asyncio
    async def test_delete_client_without_engagements(self, client_repository, engagement_repository):
        create = CreateClientUseCase(client_repository).set_current_user(OWNER)
        created = await create.execute(CreateClientRequestDTO(name="Cobalt"))
        delete = DeleteClientUseCase(client_repository, engagement_repository).set_current_user(OWNER)

        result = await delete.execute(created.data.id)

        assert result.data is True
        assert client_repository.get_by_id(created.data.id, OWNER) is None


class TestEngagementUseCases:
    """Test cases for engagement use cases."""

    @pytest.mark.asyncio
    async def test_create_hourly(self, engagement_repository, client_repository):
        create = CreateEngagementUseCase(engagement_repository, client_repository).set_current_user(OWNER)
        create.clock = at(datetime(2025, 1, 15))

        result = await create.execute(CreateEngagementRequestDTO(
            client_id=1,
            project_name="Audit",
            start_date=date(2025, 2, 1),
            end_date=date(2025, 2, 28),
            hourly_rate=Decimal("150"),
        ))

        assert result.success is True
        assert result.data.status == EngagementStatus.UPCOMING
        assert result.data.net_terms == 30
        assert result.data.billing_mode == "hourly"

    @pytest.mark.asyncio
    async def test_create_without_rate(self, engagement_repository, client_repository):
        create = CreateEngagementUseCase(engagement_repository, client_repository).set_current_user(OWNER)

        result = await create.execute(CreateEngagementRequestDTO(
            client_id=1,
            project_name="Audit",
            start_date=date(2025, 2, 1),
            end_date=date(2025, 2, 28),
            billing_mode="project",
        ))

        assert result.error_code == "MISSING_RATE"

    @pytest.mark.asyncio
    async def test_create_with_inverted_dates(self, engagement_repository, client_repository):
        create = CreateEngagementUseCase(engagement_repository, client_repository).set_current_user(OWNER)

        result = await create.execute(CreateEngagementRequestDTO(
            client_id=1,
            project_name="Audit",
            start_date=date(2025, 3, 1),
            end_date=date(2025, 2, 1),
            hourly_rate=Decimal("150"),
        ))

        assert result.error_code == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_create_for_unknown_client(self, engagement_repository, client_repository):
        create = CreateEngagementUseCase(engagement_repository, client_repository).set_current_user(OWNER)

        result = await create.execute(CreateEngagementRequestDTO(
            client_id=99,
            project_name="Audit",
            start_date=date(2025, 2, 1),
            end_date=date(2025, 2, 28),
            hourly_rate=Decimal("150"),
        ))

        assert result.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_status_is_derived_on_read(self, engagement_repository):
        get = GetEngagementByIdUseCase(engagement_repository).set_current_user(OWNER)

        get.clock = at(datetime(2024, 12, 31, 23, 59))
        before = await get.execute(20)
        get.clock = at(datetime(2025, 6, 30, 18, 0))
        during = await get.execute(20)
        get.clock = at(datetime(2025, 7, 1))
        after = await get.execute(20)

        assert [before.data.status, during.data.status, after.data.status] == ["upcoming", "active", "completed"]

    @pytest.mark.asyncio
    async def test_update_switches_billing_mode(self, engagement_repository):
        update = UpdateEngagementUseCase(engagement_repository).set_current_user(OWNER)

        result = await update.execute(UpdateEngagementCommand(10, UpdateEngagementRequestDTO(
            billing_mode="project", hourly_rate=None, total_cost=Decimal("9000"),
        )))

        assert result.success is True
        assert result.data.billing_mode == "project"
        assert result.data.hourly_rate is None
        assert result.data.total_cost == Decimal("9000")

    @pytest.mark.asyncio
    async def test_update_rejects_inverted_dates(self, engagement_repository):
        update = UpdateEngagementUseCase(engagement_repository).set_current_user(OWNER)

        result = await update.execute(UpdateEngagementCommand(10, UpdateEngagementRequestDTO(
            end_date=date(2024, 12, 1),
        )))

        assert result.error_code == "VALIDATION_ERROR"
        assert engagement_repository.get_by_id(10, OWNER).end_date == date(2025, 12, 31)

    @pytest.mark.asyncio
    async def test_list_by_status(self, engagement_repository):
        list_use_case = ListEngagementsUseCase(engagement_repository).set_current_user(OWNER)
        list_use_case.clock = at(datetime(2025, 8, 1))

        active = await list_use_case.execute(ListEngagementsRequestDTO(status=EngagementStatus.ACTIVE))
        completed = await list_use_case.execute(ListEngagementsRequestDTO(status="completed"))

        assert [engagement.id for engagement in active.data] == [10]
        assert [engagement.id for engagement in completed.data] == [20]

    @pytest.mark.asyncio
    async def test_list_by_overlapping_range(self, engagement_repository):
        list_use_case = ListEngagementsUseCase(engagement_repository).set_current_user(OWNER)
        list_use_case.clock = at(datetime(2025, 8, 1))

        result = await list_use_case.execute(ListEngagementsRequestDTO(date_range="month"))

        assert [engagement.id for engagement in result.data] == [10]

    @pytest.mark.asyncio
    async def test_delete_refused_with_time_logs(self, engagement_repository, time_log_repository, invoice_repository):
        delete = DeleteEngagementUseCase(
            engagement_repository, time_log_repository, invoice_repository
        ).set_current_user(OWNER)

        result = await delete.execute(10)

        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        assert engagement_repository.get_by_id(10, OWNER) is not None

    @pytest.mark.asyncio
    async def test_delete_unused_engagement(self, engagement_repository, time_log_repository, invoice_repository):
        for time_log in time_log_repository.get_by_engagement(20, OWNER):
            time_log_repository.delete(time_log.id, OWNER)
        delete = DeleteEngagementUseCase(
            engagement_repository, time_log_repository, invoice_repository
        ).set_current_user(OWNER)

        result = await delete.execute(20)

        assert result.data is True
