"""
Unit tests for invoice use cases.
"""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal

from consultdesk.application.dto.invoice_dto import (
    ChangeInvoiceStatusRequestDTO,
    GenerateInvoiceRequestDTO,
    ListInvoicesRequestDTO,
)
from consultdesk.application.use_cases.invoice_use_cases import (
    ChangeInvoiceStatusCommand,
    ChangeInvoiceStatusUseCase,
    DeleteInvoiceUseCase,
    GenerateInvoiceUseCase,
    GetRecommendedStatusUseCase,
    InvoiceSummaryUseCase,
    ListInvoicesUseCase,
)
from consultdesk.domain.events.base import EventDispatcher
from consultdesk.domain.models.invoice import InvoiceStatus
from consultdesk.domain.services.invoice_lifecycle_service import (
    InvoiceLifecycle,
    StrictTransitionPolicy,
)


NOW = datetime(2025, 4, 1, 9, 30)
OWNER = "user-123"


def fixed_clock():
    return NOW


@pytest.fixture
def generate(invoice_repository, engagement_repository, client_repository, time_log_repository, aggregation_lock):
    use_case = GenerateInvoiceUseCase(
        invoice_repository,
        engagement_repository,
        client_repository,
        time_log_repository,
        aggregation_lock,
    )
    use_case.event_dispatcher = EventDispatcher()
    use_case.clock = fixed_clock
    return use_case.set_current_user(OWNER)


def march_request(engagement_id=10, **overrides):
    values = dict(
        engagement_id=engagement_id,
        period_start=date(2025, 3, 1),
        period_end=date(2025, 3, 31),
    )
    values.update(overrides)
    return GenerateInvoiceRequestDTO(**values)


class TestGenerateInvoiceUseCase:
    """Test cases for GenerateInvoiceUseCase."""

    @pytest.mark.asyncio
    async def test_generate_hourly_invoice(self, generate, invoice_repository):
        result = await generate.execute(march_request())

        assert result.success is True
        invoice = result.data
        assert invoice.invoice_number == "INV-000001"
        assert invoice.status == InvoiceStatus.PENDING
        assert invoice.issue_date == date(2025, 4, 1)
        assert invoice.due_date == date(2025, 5, 1)
        assert invoice.total_hours == Decimal("7")
        assert invoice.total_amount == Decimal("700.00")
        assert [item.time_log_id for item in invoice.line_items] == [1, 2]
        assert invoice.client_name == "Acme Corp"
        assert invoice.project_name == "Data Platform"
        assert invoice.billing_contact.email == "billing@acme.com"
        assert len(invoice_repository.items) == 1

    @pytest.mark.asyncio
    async def test_numbers_increase_per_invoice(self, generate):
        first = await generate.execute(march_request())
        second = await generate.execute(march_request(period_start=date(2025, 4, 1), period_end=date(2025, 4, 30)))

        assert first.data.invoice_number == "INV-000001"
        assert second.data.invoice_number == "INV-000002"

    @pytest.mark.asyncio
    async def test_explicit_issue_date(self, generate, engagement_repository):
        engagement_repository.get_by_id(10, OWNER).net_terms = 15

        result = await generate.execute(march_request(issue_date=date(2025, 4, 10)))

        assert result.data.issue_date == date(2025, 4, 10)
        assert result.data.due_date == date(2025, 4, 10) + timedelta(days=15)

    @pytest.mark.asyncio
    async def test_empty_period(self, generate, invoice_repository):
        result = await generate.execute(march_request(period_start=date(2025, 6, 1), period_end=date(2025, 6, 30)))

        assert result.success is False
        assert result.error_code == "EMPTY_PERIOD"
        assert invoice_repository.items == {}

    @pytest.mark.asyncio
    async def test_inverted_period(self, generate):
        result = await generate.execute(march_request(period_start=date(2025, 3, 31), period_end=date(2025, 3, 1)))

        assert result.error_code == "INVALID_RANGE"

    @pytest.mark.asyncio
    async def test_unknown_engagement(self, generate):
        result = await generate.execute(march_request(engagement_id=999))

        assert result.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_other_tenant_cannot_invoice(self, generate):
        generate.set_current_user("someone-else")

        result = await generate.execute(march_request())

        assert result.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_missing_rate(self, generate, engagement_repository):
        engagement_repository.get_by_id(10, OWNER).hourly_rate = None

        result = await generate.execute(march_request())

        assert result.error_code == "MISSING_RATE"

    @pytest.mark.asyncio
    async def test_project_invoice(self, generate):
        result = await generate.execute(march_request(engagement_id=20))

        assert result.success is True
        assert len(result.data.line_items) == 1
        assert result.data.total_amount == Decimal("5000.00")
        assert result.data.total_hours == Decimal("6")

    @pytest.mark.asyncio
    async def test_concurrent_generation_conflicts(self, generate, aggregation_lock, invoice_repository):
        aggregation_lock.acquire(10, date(2025, 3, 1), date(2025, 3, 31))

        result = await generate.execute(march_request())

        assert result.success is False
        assert result.error_code == "CONCURRENT_AGGREGATION"
        assert invoice_repository.save_calls == 0

    @pytest.mark.asyncio
    async def test_lock_released_after_failure(self, generate, aggregation_lock):
        await generate.execute(march_request(period_start=date(2025, 6, 1), period_end=date(2025, 6, 30)))

        assert aggregation_lock.acquired == [(10, date(2025, 6, 1), date(2025, 6, 30))]
        assert aggregation_lock.held == set()

    @pytest.mark.asyncio
    async def test_generated_event_published(self, generate):
        await generate.execute(march_request())

        log = generate.event_dispatcher.get_event_log()
        assert [entry["event_type"] for entry in log] == ["InvoiceGenerated"]
        assert log[0]["data"]["total_amount"] == "700.00"
        assert log[0]["data"]["line_item_count"] == 2

    @pytest.mark.asyncio
    async def test_time_logs_are_not_consumed(self, generate, time_log_repository):
        await generate.execute(march_request())

        assert len(time_log_repository.get_by_engagement(10, OWNER)) == 3


def status_change(invoice_repository, policy=None):
    use_case = ChangeInvoiceStatusUseCase(invoice_repository, InvoiceLifecycle(policy))
    use_case.event_dispatcher = EventDispatcher()
    use_case.clock = lambda: datetime(2025, 4, 5, 12, 0)
    return use_case.set_current_user(OWNER)


class TestChangeInvoiceStatusUseCase:
    """Test cases for ChangeInvoiceStatusUseCase."""

    @pytest.mark.asyncio
    async def test_change_status(self, generate, invoice_repository):
        created = await generate.execute(march_request())
        use_case = status_change(invoice_repository)

        result = await use_case.execute(
            ChangeInvoiceStatusCommand(created.data.id, ChangeInvoiceStatusRequestDTO(status="paid"))
        )

        assert result.success is True
        assert result.data.previous_status == InvoiceStatus.PENDING
        assert result.data.status == InvoiceStatus.PAID
        assert result.data.last_status_change_at == datetime(2025, 4, 5, 12, 0)
        stored = invoice_repository.get_by_id(created.data.id, OWNER)
        assert stored.status == InvoiceStatus.PAID
        assert stored.total_amount == Decimal("700.00")
        assert stored.version == 2

        log = use_case.event_dispatcher.get_event_log()
        assert log[0]["data"]["old_status"] == "pending"
        assert log[0]["data"]["new_status"] == "paid"

    @pytest.mark.asyncio
    async def test_unknown_status(self, generate, invoice_repository):
        created = await generate.execute(march_request())

        result = await status_change(invoice_repository).execute(
            ChangeInvoiceStatusCommand(created.data.id, ChangeInvoiceStatusRequestDTO(status="void"))
        )

        assert result.error_code == "VALIDATION_ERROR"
        assert invoice_repository.get_by_id(created.data.id, OWNER).status == InvoiceStatus.PENDING

    @pytest.mark.asyncio
    async def test_same_status_records_no_event(self, generate, invoice_repository):
        created = await generate.execute(march_request())
        use_case = status_change(invoice_repository)

        result = await use_case.execute(
            ChangeInvoiceStatusCommand(created.data.id, ChangeInvoiceStatusRequestDTO(status="pending"))
        )

        assert result.success is True
        assert use_case.event_dispatcher.get_event_log() == []

    @pytest.mark.asyncio
    async def test_strict_policy_refuses_skipping_submission(self, generate, invoice_repository):
        created = await generate.execute(march_request())

        result = await status_change(invoice_repository, StrictTransitionPolicy()).execute(
            ChangeInvoiceStatusCommand(created.data.id, ChangeInvoiceStatusRequestDTO(status="paid"))
        )

        assert result.error_code == "BUSINESS_RULE_VIOLATION"

    @pytest.mark.asyncio
    async def test_missing_invoice(self, invoice_repository):
        result = await status_change(invoice_repository).execute(
            ChangeInvoiceStatusCommand(404, ChangeInvoiceStatusRequestDTO(status="paid"))
        )

        assert result.error_code == "ENTITY_NOT_FOUND"


class TestGetRecommendedStatusUseCase:
    """Test cases for the advisory overdue check."""

    @pytest.mark.asyncio
    async def test_recommends_overdue_without_writing(self, generate, invoice_repository):
        created = await generate.execute(march_request())
        use_case = GetRecommendedStatusUseCase(invoice_repository).set_current_user(OWNER)
        use_case.clock = lambda: datetime(2025, 5, 2, 8, 0)

        result = await use_case.execute(created.data.id)

        assert result.data.status == InvoiceStatus.PENDING
        assert result.data.recommended_status == InvoiceStatus.OVERDUE
        assert result.data.is_overdue is True
        assert result.data.evaluated_on == date(2025, 5, 2)
        assert invoice_repository.get_by_id(created.data.id, OWNER).status == InvoiceStatus.PENDING

    @pytest.mark.asyncio
    async def test_not_overdue_before_due_date(self, generate, invoice_repository):
        created = await generate.execute(march_request())
        use_case = GetRecommendedStatusUseCase(invoice_repository).set_current_user(OWNER)
        use_case.clock = lambda: datetime(2025, 4, 20)

        result = await use_case.execute(created.data.id)

        assert result.data.recommended_status == InvoiceStatus.PENDING
        assert result.data.is_overdue is False


class TestListInvoicesUseCase:
    """Test cases for invoice listing and summary."""

    @pytest.mark.asyncio
    async def test_filter_by_status_and_range(self, generate, invoice_repository):
        await generate.execute(march_request())
        await generate.execute(march_request(engagement_id=20, issue_date=date(2024, 12, 1)))
        use_case = ListInvoicesUseCase(invoice_repository).set_current_user(OWNER)
        use_case.clock = fixed_clock

        this_year = await use_case.execute(ListInvoicesRequestDTO(date_range="current"))
        paid = await use_case.execute(ListInvoicesRequestDTO(status="paid"))
        everything = await use_case.execute(ListInvoicesRequestDTO())

        assert [invoice.invoice_number for invoice in this_year.data] == ["INV-000001"]
        assert paid.data == []
        assert len(everything.data) == 2

    @pytest.mark.asyncio
    async def test_unknown_status_filter(self, invoice_repository):
        use_case = ListInvoicesUseCase(invoice_repository).set_current_user(OWNER)

        result = await use_case.execute(ListInvoicesRequestDTO(status="cancelled"))

        assert result.error_code == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_unknown_range_token(self, invoice_repository):
        use_case = ListInvoicesUseCase(invoice_repository).set_current_user(OWNER)

        result = await use_case.execute(ListInvoicesRequestDTO(date_range="fortnight"))

        assert result.error_code == "UNKNOWN_RANGE_TOKEN"

    @pytest.mark.asyncio
    async def test_summary(self, generate, invoice_repository):
        created = await generate.execute(march_request())
        await generate.execute(march_request(engagement_id=20))
        await status_change(invoice_repository).execute(
            ChangeInvoiceStatusCommand(created.data.id, ChangeInvoiceStatusRequestDTO(status="paid"))
        )
        use_case = InvoiceSummaryUseCase(invoice_repository).set_current_user(OWNER)
        use_case.clock = fixed_clock

        result = await use_case.execute(ListInvoicesRequestDTO(date_range="current"))

        summary = result.data
        assert summary.label == "2025 Year-to-Date"
        assert summary.invoice_count == 2
        assert summary.total_invoiced.amount == Decimal("5700.00")
        assert summary.paid_total.amount == Decimal("700.00")
        assert summary.outstanding_total.amount == Decimal("5000.00")
        assert summary.paid_percentage == Decimal("12.3")


class TestDeleteInvoiceUseCase:
    """Test cases for DeleteInvoiceUseCase."""

    @pytest.mark.asyncio
    async def test_delete_allows_regeneration(self, generate, invoice_repository):
        created = await generate.execute(march_request())
        use_case = DeleteInvoiceUseCase(invoice_repository).set_current_user(OWNER)
        use_case.event_dispatcher = EventDispatcher()

        result = await use_case.execute(created.data.id)
        regenerated = await generate.execute(march_request())

        assert result.data is True
        assert [entry["event_type"] for entry in use_case.event_dispatcher.get_event_log()] == ["InvoiceDeleted"]
        assert regenerated.success is True
        assert regenerated.data.total_amount == Decimal("700.00")

    @pytest.mark.asyncio
    async def test_delete_missing_invoice(self, invoice_repository):
        use_case = DeleteInvoiceUseCase(invoice_repository).set_current_user(OWNER)

        result = await use_case.execute(404)

        assert result.error_code == "ENTITY_NOT_FOUND"
