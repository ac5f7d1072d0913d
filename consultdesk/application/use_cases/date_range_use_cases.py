"""
Date range use case: resolves a range token for display next to list views.
"""

from typing import Optional

from consultdesk.application.use_cases.base_use_case import ClockedUseCase, QueryUseCase
from consultdesk.application.dto.base_dto import DateRangeFilterDTO
from consultdesk.application.dto.date_range_dto import DateRangeResponseDTO
from consultdesk.domain.services.date_range_service import (
    DateRangeResolver, DateRangeToken, format_date_range
)


class ResolveDateRangeUseCase(ClockedUseCase, QueryUseCase[DateRangeFilterDTO, DateRangeResponseDTO]):
    """Not tenant scoped; the result depends only on the token and reference date."""

    def __init__(self, resolver: Optional[DateRangeResolver] = None):
        super().__init__()
        self.resolver = resolver or DateRangeResolver()

    async def _execute_business_logic(self, request: DateRangeFilterDTO) -> DateRangeResponseDTO:
        token = DateRangeToken.parse(request.date_range)
        reference_date = request.reference_date or self.today()

        date_range = self.resolver.resolve(token, reference_date, request.start_date, request.end_date)
        label = self.resolver.label(token, reference_date, request.start_date, request.end_date)
        return DateRangeResponseDTO.from_domain(token.value, date_range, label, format_date_range(date_range))
