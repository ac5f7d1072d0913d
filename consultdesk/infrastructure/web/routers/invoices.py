"""
Invoice router.
Handles invoice generation, status changes and the invoice list views.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from consultdesk.infrastructure.auth import CurrentUserId
from consultdesk.infrastructure.web.dependencies import (
    AggregationLockDep, ClientRepositoryDep, EngagementRepositoryDep,
    InvoiceRepositoryDep, TimeLogRepositoryDep
)
from consultdesk.infrastructure.web.middleware.error_handler import raise_for_result
from consultdesk.application.use_cases.invoice_use_cases import (
    GenerateInvoiceUseCase,
    ChangeInvoiceStatusUseCase,
    ChangeInvoiceStatusCommand,
    GetRecommendedStatusUseCase,
    GetInvoiceByIdUseCase,
    ListInvoicesUseCase,
    InvoiceSummaryUseCase,
    DeleteInvoiceUseCase
)
from consultdesk.application.dto.invoice_dto import (
    GenerateInvoiceRequestDTO,
    ChangeInvoiceStatusRequestDTO,
    ListInvoicesRequestDTO,
    InvoiceResponseDTO,
    InvoiceStatusChangeResponseDTO,
    RecommendedStatusResponseDTO,
    InvoiceSummaryResponseDTO
)


router = APIRouter()


def invoice_filters(
    status: Optional[str] = Query(None, description="pending, submitted, paid or overdue"),
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    engagement_id: Optional[int] = Query(None, description="Filter by engagement ID"),
    date_range: str = Query("all", description="Range token applied to the issue date"),
    start_date: Optional[date] = Query(None, description="Custom range start"),
    end_date: Optional[date] = Query(None, description="Custom range end"),
    reference_date: Optional[date] = Query(None, description="Resolve the range relative to this date")
) -> ListInvoicesRequestDTO:
    return ListInvoicesRequestDTO(
        status=status,
        client_id=client_id,
        engagement_id=engagement_id,
        date_range=date_range,
        start_date=start_date,
        end_date=end_date,
        reference_date=reference_date,
    )


@router.post("/generate", status_code=status.HTTP_201_CREATED, response_model=InvoiceResponseDTO)
async def generate_invoice(
    request: GenerateInvoiceRequestDTO,
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep,
    engagement_repository: EngagementRepositoryDep,
    client_repository: ClientRepositoryDep,
    time_log_repository: TimeLogRepositoryDep,
    aggregation_lock: AggregationLockDep
):
    """
    Generate an invoice from an engagement's time logs in a billing period.

    - **period_start** / **period_end**: Inclusive billing period
    - **issue_date**: Defaults to today; the due date adds the engagement's net terms
    - **milestone_amount**: Partial amount for project engagements
    """
    use_case = GenerateInvoiceUseCase(
        repository,
        engagement_repository,
        client_repository,
        time_log_repository,
        aggregation_lock,
    ).set_current_user(user_id)
    return raise_for_result(await use_case.execute(request))


@router.get("", response_model=List[InvoiceResponseDTO])
async def list_invoices(
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep,
    filters: ListInvoicesRequestDTO = Depends(invoice_filters)
):
    """List invoices, most recently issued first."""
    use_case = ListInvoicesUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(filters))


@router.get("/summary", response_model=InvoiceSummaryResponseDTO)
async def summarize_invoices(
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep,
    filters: ListInvoicesRequestDTO = Depends(invoice_filters)
):
    """Totals with the paid and outstanding split for the filtered invoices."""
    use_case = InvoiceSummaryUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(filters))


@router.get("/{invoice_id}", response_model=InvoiceResponseDTO)
async def get_invoice(
    invoice_id: int,
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep
):
    """Get an invoice with its line items."""
    use_case = GetInvoiceByIdUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(invoice_id))


@router.put("/{invoice_id}/status", response_model=InvoiceStatusChangeResponseDTO)
async def change_invoice_status(
    invoice_id: int,
    request: ChangeInvoiceStatusRequestDTO,
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep
):
    """
    Change an invoice's status. Line items and totals never change.
    """
    use_case = ChangeInvoiceStatusUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(ChangeInvoiceStatusCommand(invoice_id, request)))


@router.get("/{invoice_id}/recommended-status", response_model=RecommendedStatusResponseDTO)
async def get_recommended_status(
    invoice_id: int,
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep
):
    """Whether the invoice should be marked overdue. Read only."""
    use_case = GetRecommendedStatusUseCase(repository).set_current_user(user_id)
    return raise_for_result(await use_case.execute(invoice_id))


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(
    invoice_id: int,
    user_id: CurrentUserId,
    repository: InvoiceRepositoryDep
):
    """Delete an invoice and its line items. Time logs are left in place."""
    use_case = DeleteInvoiceUseCase(repository).set_current_user(user_id)
    raise_for_result(await use_case.execute(invoice_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
