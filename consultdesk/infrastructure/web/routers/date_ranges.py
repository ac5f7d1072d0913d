"""
Date range router.
Resolves range tokens so clients can show the concrete dates of a filter.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Query

from consultdesk.application.dto.base_dto import DateRangeFilterDTO
from consultdesk.application.dto.date_range_dto import DateRangeResponseDTO
from consultdesk.application.use_cases.date_range_use_cases import ResolveDateRangeUseCase
from consultdesk.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()


@router.get("/resolve", response_model=DateRangeResponseDTO)
async def resolve_date_range(
    token: str = Query("all", description="all, current, year, last, month, quarter, week, today, last3, last6, last12 or custom"),
    start_date: Optional[date] = Query(None, description="Start of a custom range"),
    end_date: Optional[date] = Query(None, description="End of a custom range"),
    reference_date: Optional[date] = Query(None, description="Resolve relative to this date instead of today")
):
    """
    Resolve a range token to inclusive start and end dates.

    - **token**: Range token; unknown tokens are rejected with 400
    - **start_date** / **end_date**: Required with `custom`
    - **reference_date**: Defaults to today
    """
    use_case = ResolveDateRangeUseCase()
    result = await use_case.execute(DateRangeFilterDTO(
        date_range=token,
        start_date=start_date,
        end_date=end_date,
        reference_date=reference_date,
    ))
    return raise_for_result(result)
