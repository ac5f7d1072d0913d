"""
Invoice use cases for the application layer.
Generation turns an engagement's time logs in a billing period into an
immutable set of line items; afterwards only the status moves.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from consultdesk.application.use_cases.base_use_case import (
    AuthorizedUseCase, ClockedUseCase, CreateUseCase, UpdateUseCase,
    DeleteUseCase, GetByIdUseCase, QueryUseCase
)
from consultdesk.application.dto.invoice_dto import (
    GenerateInvoiceRequestDTO, ChangeInvoiceStatusRequestDTO, ListInvoicesRequestDTO,
    InvoiceResponseDTO, InvoiceStatusChangeResponseDTO, RecommendedStatusResponseDTO,
    InvoiceSummaryResponseDTO
)
from consultdesk.config import Settings, get_settings
from consultdesk.domain.events.invoice_events import (
    InvoiceGenerated, InvoiceStatusChanged, InvoiceDeleted
)
from consultdesk.domain.models.base import EntityNotFoundError
from consultdesk.domain.models.invoice import Invoice, InvoiceStatus
from consultdesk.domain.models.value_objects import DateRange
from consultdesk.domain.repositories.aggregation_lock import AggregationLock
from consultdesk.domain.repositories.client_repository import ClientRepository
from consultdesk.domain.repositories.engagement_repository import EngagementRepository
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository
from consultdesk.domain.repositories.time_log_repository import TimeLogRepository
from consultdesk.domain.services.billing_service import BillableAmountCalculator
from consultdesk.domain.services.date_range_service import DateRangeResolver
from consultdesk.domain.services.invoice_aggregation_service import InvoiceAggregator
from consultdesk.domain.services.invoice_lifecycle_service import InvoiceLifecycle
from consultdesk.domain.services.numbering_service import NumberingService
from consultdesk.domain.services.reporting_service import ClientAggregationReporting


logger = logging.getLogger(__name__)


@dataclass
class ChangeInvoiceStatusCommand:
    invoice_id: int
    changes: ChangeInvoiceStatusRequestDTO


def _get_invoice(repository: InvoiceRepository, invoice_id: int, owner_id: str) -> Invoice:
    invoice = repository.get_by_id(invoice_id, owner_id)
    if not invoice:
        raise EntityNotFoundError("Invoice", invoice_id)
    return invoice


class GenerateInvoiceUseCase(
    AuthorizedUseCase,
    ClockedUseCase,
    CreateUseCase[GenerateInvoiceRequestDTO, InvoiceResponseDTO]
):
    """
    Use case for generating an invoice for one engagement and period.

    Generation for the same (engagement, period) is serialized through the
    aggregation lock; a second concurrent request fails with
    ConcurrentAggregationConflict instead of waiting.
    """

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        engagement_repository: EngagementRepository,
        client_repository: ClientRepository,
        time_log_repository: TimeLogRepository,
        aggregation_lock: AggregationLock,
        settings: Optional[Settings] = None
    ):
        super().__init__()
        self.invoice_repository = invoice_repository
        self.engagement_repository = engagement_repository
        self.client_repository = client_repository
        self.time_log_repository = time_log_repository
        self.aggregation_lock = aggregation_lock
        self.settings = settings or get_settings()
        self.aggregator = InvoiceAggregator(BillableAmountCalculator(self.settings.default_currency))
        self.numbering = NumberingService(self.settings.invoice_number_prefix)

    async def _execute_command_logic(self, request: GenerateInvoiceRequestDTO) -> InvoiceResponseDTO:
        period = DateRange(request.period_start, request.period_end)

        engagement = self.engagement_repository.get_by_id(request.engagement_id, self.current_user_id)
        if not engagement:
            raise EntityNotFoundError("Engagement", request.engagement_id)

        client = self.client_repository.get_by_id(engagement.client_id, self.current_user_id)
        if not client:
            raise EntityNotFoundError("Client", engagement.client_id)

        with self.aggregation_lock.hold(engagement.id, period.start, period.end):
            candidates = self.time_log_repository.get_by_engagement(
                engagement.id, self.current_user_id, period=period
            )
            draft = self.aggregator.aggregate(
                engagement,
                period.start,
                period.end,
                candidates,
                milestone_amount=request.milestone_amount,
            )

            invoice_number = self.numbering.next_invoice_number(
                self.invoice_repository.get_invoice_numbers(self.current_user_id)
            )
            invoice = Invoice.from_draft(
                draft,
                owner_id=self.current_user_id,
                invoice_number=str(invoice_number),
                issue_date=request.issue_date or self.today(),
                net_terms=engagement.net_terms,
                notes=request.notes,
                client_name=client.name,
                project_name=engagement.project_name,
                billing_contact=client.billing_contact,
                created_at=self.now(),
            )
            saved = self.invoice_repository.save(invoice)

        self.record_event(InvoiceGenerated(
            invoice_id=saved.id,
            owner_id=saved.owner_id,
            client_id=saved.client_id,
            engagement_id=saved.engagement_id,
            invoice_number=saved.invoice_number,
            period_start=saved.period_start,
            period_end=saved.period_end,
            total_amount=str(saved.total_amount),
            total_hours=str(saved.total_hours),
            line_item_count=len(saved.line_items),
        ))
        logger.info(
            f"Generated invoice {saved.invoice_number} for engagement {engagement.id} "
            f"with {len(saved.line_items)} line items totalling {saved.total_amount}"
        )
        return InvoiceResponseDTO.from_domain(saved)


class ChangeInvoiceStatusUseCase(
    AuthorizedUseCase,
    ClockedUseCase,
    UpdateUseCase[ChangeInvoiceStatusCommand, InvoiceStatusChangeResponseDTO]
):
    """Use case for moving an invoice between pending, submitted, paid and overdue."""

    def __init__(self, invoice_repository: InvoiceRepository, lifecycle: Optional[InvoiceLifecycle] = None):
        super().__init__()
        self.invoice_repository = invoice_repository
        self.lifecycle = lifecycle or InvoiceLifecycle()

    async def _execute_command_logic(self, request: ChangeInvoiceStatusCommand) -> InvoiceStatusChangeResponseDTO:
        invoice = _get_invoice(self.invoice_repository, request.invoice_id, self.current_user_id)

        previous = self.lifecycle.transition(invoice, request.changes.status, self.now())
        invoice.increment_version()
        saved = self.invoice_repository.save(invoice)

        if previous != saved.status:
            self.record_event(InvoiceStatusChanged(
                invoice_id=saved.id,
                owner_id=saved.owner_id,
                invoice_number=saved.invoice_number,
                old_status=previous.value,
                new_status=saved.status.value,
            ))

        return InvoiceStatusChangeResponseDTO(
            invoice_id=saved.id,
            previous_status=previous,
            status=saved.status,
            last_status_change_at=saved.last_status_change_at,
        )


class GetRecommendedStatusUseCase(
    AuthorizedUseCase,
    ClockedUseCase,
    GetByIdUseCase[int, RecommendedStatusResponseDTO]
):
    """Use case for the advisory overdue check. Nothing is written."""

    def __init__(self, invoice_repository: InvoiceRepository, lifecycle: Optional[InvoiceLifecycle] = None):
        super().__init__()
        self.invoice_repository = invoice_repository
        self.lifecycle = lifecycle or InvoiceLifecycle()

    async def _execute_business_logic(self, request: int) -> RecommendedStatusResponseDTO:
        invoice = _get_invoice(self.invoice_repository, request, self.current_user_id)
        today = self.today()
        recommended = self.lifecycle.recommended_status(invoice, today)

        return RecommendedStatusResponseDTO(
            invoice_id=invoice.id,
            status=invoice.status,
            recommended_status=recommended,
            is_overdue=recommended == InvoiceStatus.OVERDUE,
            due_date=invoice.due_date,
            evaluated_on=today,
        )


class GetInvoiceByIdUseCase(AuthorizedUseCase, GetByIdUseCase[int, InvoiceResponseDTO]):
    """Use case for retrieving an invoice with its line items."""

    def __init__(self, invoice_repository: InvoiceRepository):
        super().__init__()
        self.invoice_repository = invoice_repository

    async def _execute_business_logic(self, request: int) -> InvoiceResponseDTO:
        return InvoiceResponseDTO.from_domain(
            _get_invoice(self.invoice_repository, request, self.current_user_id)
        )


class ListInvoicesUseCase(
    AuthorizedUseCase,
    ClockedUseCase,
    QueryUseCase[ListInvoicesRequestDTO, List[InvoiceResponseDTO]]
):
    """Use case for listing invoices filtered by status, client, engagement and issue date."""

    def __init__(self, invoice_repository: InvoiceRepository):
        super().__init__()
        self.invoice_repository = invoice_repository

    def _load(self, request: ListInvoicesRequestDTO) -> List[Invoice]:
        issued = self.resolve_range(
            request.date_range, request.start_date, request.end_date, request.reference_date
        )
        status = InvoiceStatus.parse(request.status) if request.status else None
        return self.invoice_repository.get_by_owner(
            self.current_user_id,
            status=status,
            client_id=request.client_id,
            issued=issued,
            engagement_id=request.engagement_id,
        )

    async def _execute_business_logic(self, request: ListInvoicesRequestDTO) -> List[InvoiceResponseDTO]:
        return [InvoiceResponseDTO.from_domain(invoice) for invoice in self._load(request)]


class InvoiceSummaryUseCase(ListInvoicesUseCase):
    """Use case for the totals and paid/outstanding split above the invoice list."""

    def __init__(
        self,
        invoice_repository: InvoiceRepository,
        reporting: Optional[ClientAggregationReporting] = None
    ):
        super().__init__(invoice_repository)
        self.reporting = reporting or ClientAggregationReporting(
            calculator=BillableAmountCalculator(get_settings().default_currency)
        )

    async def _execute_business_logic(self, request: ListInvoicesRequestDTO) -> InvoiceSummaryResponseDTO:
        reference_date = request.reference_date or self.today()
        summary = self.reporting.invoice_summary(self._load(request))
        label = DateRangeResolver().label(
            request.date_range, reference_date, request.start_date, request.end_date
        )
        return InvoiceSummaryResponseDTO.from_domain(summary, label)


class DeleteInvoiceUseCase(AuthorizedUseCase, DeleteUseCase[int, bool]):
    """
    Use case for deleting an invoice and its line items. The time logs it
    was built from stay untouched and can be invoiced again.
    """

    def __init__(self, invoice_repository: InvoiceRepository):
        super().__init__()
        self.invoice_repository = invoice_repository

    async def _execute_command_logic(self, request: int) -> bool:
        invoice = _get_invoice(self.invoice_repository, request, self.current_user_id)
        deleted = self.invoice_repository.delete(invoice.id, self.current_user_id)

        if deleted:
            self.record_event(InvoiceDeleted(
                invoice_id=invoice.id,
                owner_id=invoice.owner_id,
                invoice_number=invoice.invoice_number,
            ))
        return deleted
