"""
Engagement router.
Engagement status is never stored; every response carries the status
derived from the contract dates at request time.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Query, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import (
    ClientRepositoryDep, EngagementRepositoryDep, TimeLogRepositoryDep, InvoiceRepositoryDep
)
from consultdesk.infrastructure.web.middleware.error_handler import raise_for_result
from consultdesk.application.use_cases.engagement_use_cases import (
    CreateEngagementUseCase,
    UpdateEngagementUseCase,
    UpdateEngagementCommand,
    GetEngagementByIdUseCase,
    ListEngagementsUseCase,
    DeleteEngagementUseCase
)
from consultdesk.application.dto.engagement_dto import (
    CreateEngagementRequestDTO,
    UpdateEngagementRequestDTO,
    ListEngagementsRequestDTO,
    EngagementResponseDTO
)
from consultdesk.domain.models.engagement import EngagementStatus


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=EngagementResponseDTO)
async def create_engagement(
    request: CreateEngagementRequestDTO,
    user_id: CurrentUserId,
    repository: EngagementRepositoryDep,
    client_repository: ClientRepositoryDep
):
    """
    Create an engagement for one of the user's clients.

    - **billing_mode**: `hourly` needs **hourly_rate**, `project` needs **total_cost**
    - **net_terms**: Days until invoices are due (default from settings)
    """
    use_case = CreateEngagementUseCase(repository, client_repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(request))


@router.get("", response_model=List[EngagementResponseDTO])
async def list_engagements(
    user_id: CurrentUserId,
    repository: EngagementRepositoryDep,
    status: Optional[EngagementStatus] = Query(None, description="upcoming, active or completed"),
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    date_range: str = Query("all", description="Range the contract dates must overlap"),
    start_date: Optional[date] = Query(None, description="Custom range start"),
    end_date: Optional[date] = Query(None, description="Custom range end"),
    reference_date: Optional[date] = Query(None, description="Resolve the range relative to this date")
):
    """
    List engagements filtered by derived status, client and date range.
    """
    use_case = ListEngagementsUseCase(repository).set_current_user(user_id)
    result = await use_case.execute(ListEngagementsRequestDTO(
        status=status,
        client_id=client_id,
        date_range=date_range,
        start_date=start_date,
        end_date=end_date,
        reference_date=reference_date,
    ))
    return raise_for_result(result)


@router.get("/{engagement_id}", response_model=EngagementResponseDTO)
async def get_engagement(
    engagement_id: int,
    user_id: CurrentUserId,
    repository: EngagementRepositoryDep
):
    """Get a specific engagement by ID."""
    use_case = GetEngagementByIdUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(engagement_id))


@router.put("/{engagement_id}", response_model=EngagementResponseDTO)
async def update_engagement(
    engagement_id: int,
    request: UpdateEngagementRequestDTO,
    user_id: CurrentUserId,
    repository: EngagementRepositoryDep
):
    """
    Update an engagement. Changing the rate does not touch invoices already
    generated.
    """
    use_case = UpdateEngagementUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(UpdateEngagementCommand(engagement_id, request)))


@router.delete("/{engagement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_engagement(
    engagement_id: int,
    user_id: CurrentUserId,
    repository: EngagementRepositoryDep,
    time_log_repository: TimeLogRepositoryDep,
    invoice_repository: InvoiceRepositoryDep
):
    """Delete an engagement that has no time logs or invoices."""
    use_case = DeleteEngagementUseCase(
        repository, time_log_repository, invoice_repository
    ).set_current_user(user_id)
    raise_for_result(await use_case.execute(engagement_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
