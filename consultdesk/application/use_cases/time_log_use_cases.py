"""
Time log use cases for the application layer.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from consultdesk.application.use_cases.base_use_case import (
    AuthorizedUseCase, ClockedUseCase, CreateUseCase, UpdateUseCase,
    DeleteUseCase, GetByIdUseCase, QueryUseCase
)
from consultdesk.application.dto.time_log_dto import (
    CreateTimeLogRequestDTO, UpdateTimeLogRequestDTO, ListTimeLogsRequestDTO,
    TimeLogResponseDTO, TimeLogSummaryResponseDTO
)
from consultdesk.config import Settings, get_settings
from consultdesk.domain.models.base import EntityNotFoundError
from consultdesk.domain.models.engagement import Engagement
from consultdesk.domain.models.time_log import TimeLog
from consultdesk.domain.repositories.engagement_repository import EngagementRepository
from consultdesk.domain.repositories.time_log_repository import TimeLogRepository
from consultdesk.domain.services.billing_service import BillableAmountCalculator
from consultdesk.domain.services.date_range_service import DateRangeResolver
from consultdesk.domain.services.reporting_service import ClientAggregationReporting


@dataclass
class UpdateTimeLogCommand:
    time_log_id: int
    changes: UpdateTimeLogRequestDTO


class TimeLogUseCaseMixin:
    """Billable amount projection shared by time log responses."""

    engagement_repository: EngagementRepository
    calculator: BillableAmountCalculator

    def _engagement_for(self, time_log: TimeLog, owner_id: str) -> Engagement:
        engagement = self.engagement_repository.get_by_id(time_log.engagement_id, owner_id)
        if not engagement:
            raise EntityNotFoundError("Engagement", time_log.engagement_id)
        return engagement

    def _to_response(self, time_log: TimeLog, engagement: Engagement) -> TimeLogResponseDTO:
        return TimeLogResponseDTO.from_domain(time_log, self.calculator.amount(time_log, engagement))

    def _engagements_by_id(self, owner_id: str) -> Dict[int, Engagement]:
        return {
            engagement.id: engagement
            for engagement in self.engagement_repository.get_by_owner(owner_id)
        }


class CreateTimeLogUseCase(
    AuthorizedUseCase,
    TimeLogUseCaseMixin,
    CreateUseCase[CreateTimeLogRequestDTO, TimeLogResponseDTO]
):
    """Use case for logging hours against an engagement."""

    def __init__(
        self,
        time_log_repository: TimeLogRepository,
        engagement_repository: EngagementRepository,
        settings: Optional[Settings] = None
    ):
        super().__init__()
        self.time_log_repository = time_log_repository
        self.engagement_repository = engagement_repository
        self.settings = settings or get_settings()
        self.calculator = BillableAmountCalculator(self.settings.default_currency)

    async def _execute_command_logic(self, request: CreateTimeLogRequestDTO) -> TimeLogResponseDTO:
        engagement = self.engagement_repository.get_by_id(request.engagement_id, self.current_user_id)
        if not engagement:
            raise EntityNotFoundError("Engagement", request.engagement_id)

        time_log = TimeLog(
            owner_id=self.current_user_id,
            engagement_id=engagement.id,
            date=request.date,
            hours=request.hours,
            description=request.description,
        )
        time_log.validate(self.settings.max_hours_per_entry)

        saved = self.time_log_repository.save(time_log)
        return self._to_response(saved, engagement)


class UpdateTimeLogUseCase(
    AuthorizedUseCase,
    TimeLogUseCaseMixin,
    UpdateUseCase[UpdateTimeLogCommand, TimeLogResponseDTO]
):
    """
    Use case for editing a time log's date, hours or description.
    Already issued invoices keep their own line item copies.
    """

    def __init__(
        self,
        time_log_repository: TimeLogRepository,
        engagement_repository: EngagementRepository,
        settings: Optional[Settings] = None
    ):
        super().__init__()
        self.time_log_repository = time_log_repository
        self.engagement_repository = engagement_repository
        self.settings = settings or get_settings()
        self.calculator = BillableAmountCalculator(self.settings.default_currency)

    async def _execute_command_logic(self, request: UpdateTimeLogCommand) -> TimeLogResponseDTO:
        time_log = self.time_log_repository.get_by_id(request.time_log_id, self.current_user_id)
        if not time_log:
            raise EntityNotFoundError("TimeLog", request.time_log_id)

        changes = request.changes
        time_log.update(
            log_date=changes.date,
            hours=changes.hours,
            description=changes.description,
            max_hours=self.settings.max_hours_per_entry,
        )

        saved = self.time_log_repository.save(time_log)
        return self._to_response(saved, self._engagement_for(saved, self.current_user_id))


class GetTimeLogByIdUseCase(
    AuthorizedUseCase,
    TimeLogUseCaseMixin,
    GetByIdUseCase[int, TimeLogResponseDTO]
):
    """Use case for retrieving a single time log."""

    def __init__(
        self,
        time_log_repository: TimeLogRepository,
        engagement_repository: EngagementRepository,
        calculator: Optional[BillableAmountCalculator] = None
    ):
        super().__init__()
        self.time_log_repository = time_log_repository
        self.engagement_repository = engagement_repository
        self.calculator = calculator or BillableAmountCalculator(get_settings().default_currency)

    async def _execute_business_logic(self, request: int) -> TimeLogResponseDTO:
        time_log = self.time_log_repository.get_by_id(request, self.current_user_id)
        if not time_log:
            raise EntityNotFoundError("TimeLog", request)
        return self._to_response(time_log, self._engagement_for(time_log, self.current_user_id))


class ListTimeLogsUseCase(
    AuthorizedUseCase,
    ClockedUseCase,
    TimeLogUseCaseMixin,
    QueryUseCase[ListTimeLogsRequestDTO, List[TimeLogResponseDTO]]
):
    """Use case for listing time logs by engagement, client and date range."""

    def __init__(
        self,
        time_log_repository: TimeLogRepository,
        engagement_repository: EngagementRepository,
        calculator: Optional[BillableAmountCalculator] = None
    ):
        super().__init__()
        self.time_log_repository = time_log_repository
        self.engagement_repository = engagement_repository
        self.calculator = calculator or BillableAmountCalculator(get_settings().default_currency)

    async def _execute_business_logic(self, request: ListTimeLogsRequestDTO) -> List[TimeLogResponseDTO]:
        period = self.resolve_range(
            request.date_range, request.start_date, request.end_date, request.reference_date
        )
        time_logs = self.time_log_repository.get_by_owner(
            self.current_user_id,
            engagement_id=request.engagement_id,
            client_id=request.client_id,
            period=period,
        )

        engagements = self._engagements_by_id(self.current_user_id)
        return [
            self._to_response(time_log, engagements[time_log.engagement_id])
            for time_log in time_logs
            if time_log.engagement_id in engagements
        ]


class TimeLogSummaryUseCase(
    AuthorizedUseCase,
    ClockedUseCase,
    TimeLogUseCaseMixin,
    QueryUseCase[ListTimeLogsRequestDTO, TimeLogSummaryResponseDTO]
):
    """Use case for the totals shown above the time log list."""

    def __init__(
        self,
        time_log_repository: TimeLogRepository,
        engagement_repository: EngagementRepository,
        reporting: Optional[ClientAggregationReporting] = None
    ):
        super().__init__()
        self.time_log_repository = time_log_repository
        self.engagement_repository = engagement_repository
        self.reporting = reporting or ClientAggregationReporting(
            calculator=BillableAmountCalculator(get_settings().default_currency)
        )
        self.calculator = self.reporting.calculator

    async def _execute_business_logic(self, request: ListTimeLogsRequestDTO) -> TimeLogSummaryResponseDTO:
        reference_date = request.reference_date or self.today()
        period = self.resolve_range(request.date_range, request.start_date, request.end_date, reference_date)
        time_logs = self.time_log_repository.get_by_owner(
            self.current_user_id,
            engagement_id=request.engagement_id,
            client_id=request.client_id,
            period=period,
        )

        summary = self.reporting.time_log_summary(time_logs, self._engagements_by_id(self.current_user_id))
        label = DateRangeResolver().label(
            request.date_range, reference_date, request.start_date, request.end_date
        )
        return TimeLogSummaryResponseDTO.from_domain(summary, label)


class DeleteTimeLogUseCase(AuthorizedUseCase, DeleteUseCase[int, bool]):
    """
    Use case for deleting a time log. Invoices already generated from it
    keep their line items.
    """

    def __init__(self, time_log_repository: TimeLogRepository):
        super().__init__()
        self.time_log_repository = time_log_repository

    async def _execute_command_logic(self, request: int) -> bool:
        time_log = self.time_log_repository.get_by_id(request, self.current_user_id)
        if not time_log:
            raise EntityNotFoundError("TimeLog", request)
        return self.time_log_repository.delete(time_log.id, self.current_user_id)
