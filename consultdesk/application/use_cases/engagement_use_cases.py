"""
Engagement use cases for the application layer.
Every engagement returned is annotated with its status as of now.
"""

from dataclasses import dataclass
from typing import List, Optional

from consultdesk.application.use_cases.base_use_case import (
    AuthorizedUseCase, ClockedUseCase, CreateUseCase, UpdateUseCase,
    DeleteUseCase, GetByIdUseCase, QueryUseCase
)
from consultdesk.application.dto.engagement_dto import (
    CreateEngagementRequestDTO, UpdateEngagementRequestDTO,
    ListEngagementsRequestDTO, EngagementResponseDTO
)
from consultdesk.config import Settings, get_settings
from consultdesk.domain.models.base import BusinessRuleViolation, EntityNotFoundError
from consultdesk.domain.models.engagement import Engagement
from consultdesk.domain.repositories.client_repository import ClientRepository
from consultdesk.domain.repositories.engagement_repository import EngagementRepository
from consultdesk.domain.repositories.invoice_repository import InvoiceRepository
from consultdesk.domain.repositories.time_log_repository import TimeLogRepository
from consultdesk.domain.services.engagement_status_service import EngagementStatusResolver


@dataclass
class UpdateEngagementCommand:
    engagement_id: int
    changes: UpdateEngagementRequestDTO


class EngagementUseCaseMixin(ClockedUseCase):
    """Shared status projection for engagement responses."""

    status_resolver = EngagementStatusResolver()

    def _to_response(self, engagement: Engagement) -> EngagementResponseDTO:
        status = self.status_resolver.status_of(engagement, self.now())
        return EngagementResponseDTO.from_domain(engagement, status)


class CreateEngagementUseCase(
    AuthorizedUseCase,
    EngagementUseCaseMixin,
    CreateUseCase[CreateEngagementRequestDTO, EngagementResponseDTO]
):
    """Use case for creating an engagement for one of the user's clients."""

    def __init__(
        self,
        engagement_repository: EngagementRepository,
        client_repository: ClientRepository,
        settings: Optional[Settings] = None
    ):
        super().__init__()
        self.engagement_repository = engagement_repository
        self.client_repository = client_repository
        self.settings = settings or get_settings()

    async def _execute_command_logic(self, request: CreateEngagementRequestDTO) -> EngagementResponseDTO:
        client = self.client_repository.get_by_id(request.client_id, self.current_user_id)
        if not client:
            raise EntityNotFoundError("Client", request.client_id)

        engagement = Engagement(
            owner_id=self.current_user_id,
            client_id=client.id,
            project_name=request.project_name.strip(),
            start_date=request.start_date,
            end_date=request.end_date,
            billing_mode=request.billing_mode,
            hourly_rate=request.hourly_rate,
            total_cost=request.total_cost,
            net_terms=request.net_terms or self.settings.default_net_terms,
            description=request.description,
        )
        # rejects a mode without its rate (MissingRateError)
        engagement.validate()

        return self._to_response(self.engagement_repository.save(engagement))


class UpdateEngagementUseCase(
    AuthorizedUseCase,
    EngagementUseCaseMixin,
    UpdateUseCase[UpdateEngagementCommand, EngagementResponseDTO]
):
    """Use case for editing dates, billing or description of an engagement."""

    def __init__(self, engagement_repository: EngagementRepository):
        super().__init__()
        self.engagement_repository = engagement_repository

    async def _execute_command_logic(self, request: UpdateEngagementCommand) -> EngagementResponseDTO:
        engagement = self.engagement_repository.get_by_id(request.engagement_id, self.current_user_id)
        if not engagement:
            raise EntityNotFoundError("Engagement", request.engagement_id)

        changes = request.changes
        if changes.start_date is not None or changes.end_date is not None:
            engagement.reschedule(
                changes.start_date or engagement.start_date,
                changes.end_date or engagement.end_date,
            )

        fields = changes.model_fields_set
        if fields & {"billing_mode", "hourly_rate", "total_cost"}:
            mode = changes.billing_mode or engagement.billing_mode
            hourly_rate = changes.hourly_rate if "hourly_rate" in fields else engagement.hourly_rate
            total_cost = changes.total_cost if "total_cost" in fields else engagement.total_cost
            engagement.change_billing(mode, hourly_rate, total_cost)

        if changes.project_name is not None:
            engagement.project_name = changes.project_name.strip()
        if changes.net_terms is not None:
            engagement.net_terms = changes.net_terms
        if "description" in fields:
            engagement.description = changes.description

        engagement.validate()
        engagement.increment_version()
        return self._to_response(self.engagement_repository.save(engagement))


class GetEngagementByIdUseCase(
    AuthorizedUseCase,
    EngagementUseCaseMixin,
    GetByIdUseCase[int, EngagementResponseDTO]
):
    """Use case for retrieving an engagement with its current status."""

    def __init__(self, engagement_repository: EngagementRepository):
        super().__init__()
        self.engagement_repository = engagement_repository

    async def _execute_business_logic(self, request: int) -> EngagementResponseDTO:
        engagement = self.engagement_repository.get_by_id(request, self.current_user_id)
        if not engagement:
            raise EntityNotFoundError("Engagement", request)
        return self._to_response(engagement)


class ListEngagementsUseCase(
    AuthorizedUseCase,
    EngagementUseCaseMixin,
    QueryUseCase[ListEngagementsRequestDTO, List[EngagementResponseDTO]]
):
    """
    Use case for listing engagements filtered by derived status, client and
    a date range that the contract dates must overlap.
    """

    def __init__(self, engagement_repository: EngagementRepository):
        super().__init__()
        self.engagement_repository = engagement_repository

    async def _execute_business_logic(self, request: ListEngagementsRequestDTO) -> List[EngagementResponseDTO]:
        period = self.resolve_range(
            request.date_range, request.start_date, request.end_date, request.reference_date
        )
        engagements = self.engagement_repository.get_by_owner(
            self.current_user_id,
            client_id=request.client_id,
            overlapping=period,
        )

        annotated = self.status_resolver.filter(
            engagements,
            self.now(),
            status=request.status,
            overlapping=period,
        )
        return [EngagementResponseDTO.from_domain(engagement, status) for engagement, status in annotated]


class DeleteEngagementUseCase(AuthorizedUseCase, DeleteUseCase[int, bool]):
    """
    Use case for deleting an engagement. Only allowed while no time logs or
    invoices reference it.
    """

    def __init__(
        self,
        engagement_repository: EngagementRepository,
        time_log_repository: TimeLogRepository,
        invoice_repository: InvoiceRepository
    ):
        super().__init__()
        self.engagement_repository = engagement_repository
        self.time_log_repository = time_log_repository
        self.invoice_repository = invoice_repository

    async def _execute_command_logic(self, request: int) -> bool:
        engagement = self.engagement_repository.get_by_id(request, self.current_user_id)
        if not engagement:
            raise EntityNotFoundError("Engagement", request)

        if self.time_log_repository.get_by_engagement(engagement.id, self.current_user_id):
            raise BusinessRuleViolation("Engagement has time logs and cannot be deleted")

        if self.invoice_repository.get_by_owner(self.current_user_id, engagement_id=engagement.id):
            raise BusinessRuleViolation("Engagement has invoices and cannot be deleted")

        return self.engagement_repository.delete(engagement.id, self.current_user_id)
