"""
Time log router.
Billable amounts are computed on read from the engagement's current rate.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import EngagementRepositoryDep, TimeLogRepositoryDep
from consultdesk.infrastructure.web.middleware.error_handler import raise_for_result
from consultdesk.application.use_cases.time_log_use_cases import (
    CreateTimeLogUseCase,
    UpdateTimeLogUseCase,
    UpdateTimeLogCommand,
    GetTimeLogByIdUseCase,
    ListTimeLogsUseCase,
    TimeLogSummaryUseCase,
    DeleteTimeLogUseCase
)
from consultdesk.application.dto.time_log_dto import (
    CreateTimeLogRequestDTO,
    UpdateTimeLogRequestDTO,
    ListTimeLogsRequestDTO,
    TimeLogResponseDTO,
    TimeLogSummaryResponseDTO
)


router = APIRouter()


def time_log_filters(
    engagement_id: Optional[int] = Query(None, description="Filter by engagement ID"),
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    date_range: str = Query("all", description="Range token applied to the log date"),
    start_date: Optional[date] = Query(None, description="Custom range start"),
    end_date: Optional[date] = Query(None, description="Custom range end"),
    reference_date: Optional[date] = Query(None, description="Resolve the range relative to this date")
) -> ListTimeLogsRequestDTO:
    return ListTimeLogsRequestDTO(
        engagement_id=engagement_id,
        client_id=client_id,
        date_range=date_range,
        start_date=start_date,
        end_date=end_date,
        reference_date=reference_date,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeLogResponseDTO)
async def create_time_log(
    request: CreateTimeLogRequestDTO,
    user_id: CurrentUserId,
    repository: TimeLogRepositoryDep,
    engagement_repository: EngagementRepositoryDep
):
    """
    Log hours against an engagement.

    - **hours**: Greater than zero and at most the per-entry maximum
    """
    use_case = CreateTimeLogUseCase(repository, engagement_repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(request))


@router.get("", response_model=List[TimeLogResponseDTO])
async def list_time_logs(
    user_id: CurrentUserId,
    repository: TimeLogRepositoryDep,
    engagement_repository: EngagementRepositoryDep,
    filters: ListTimeLogsRequestDTO = Depends(time_log_filters)
):
    """List time logs ordered by date, each with its billable amount."""
    use_case = ListTimeLogsUseCase(repository, engagement_repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(filters))


@router.get("/summary", response_model=TimeLogSummaryResponseDTO)
async def summarize_time_logs(
    user_id: CurrentUserId,
    repository: TimeLogRepositoryDep,
    engagement_repository: EngagementRepositoryDep,
    filters: ListTimeLogsRequestDTO = Depends(time_log_filters)
):
    """Total hours, billable amount and average daily hours for the filtered logs."""
    use_case = TimeLogSummaryUseCase(repository, engagement_repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(filters))


@router.get("/{time_log_id}", response_model=TimeLogResponseDTO)
async def get_time_log(
    time_log_id: int,
    user_id: CurrentUserId,
    repository: TimeLogRepositoryDep,
    engagement_repository: EngagementRepositoryDep
):
    """Get a specific time log by ID."""
    use_case = GetTimeLogByIdUseCase(repository, engagement_repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(time_log_id))


@router.put("/{time_log_id}", response_model=TimeLogResponseDTO)
async def update_time_log(
    time_log_id: int,
    request: UpdateTimeLogRequestDTO,
    user_id: CurrentUserId,
    repository: TimeLogRepositoryDep,
    engagement_repository: EngagementRepositoryDep
):
    """Update the date, hours or description of a time log."""
    use_case = UpdateTimeLogUseCase(repository, engagement_repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(UpdateTimeLogCommand(time_log_id, request)))


@router.delete("/{time_log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_log(
    time_log_id: int,
    user_id: CurrentUserId,
    repository: TimeLogRepositoryDep
):
    """Delete a time log. Invoices already generated from it are unaffected."""
    use_case = DeleteTimeLogUseCase(repository).set_current_user(user_id)
    raise_for_result(await use_case.execute(time_log_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
