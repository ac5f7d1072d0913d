"""
Dashboard DTOs.
"""

from typing import Dict, List, Optional
from decimal import Decimal
from pydantic import Field

from consultdesk.domain.services.reporting_service import DashboardSummary, MonthlyRevenue
from .base_dto import BaseDTO, RequestDTO, MoneyDTO


class DashboardRequestDTO(RequestDTO):
    year: Optional[int] = Field(default=None, ge=1900, le=9999, description="Defaults to the current year")


class DashboardStatsResponseDTO(BaseDTO):
    """The four headline dashboard metrics."""

    year: int
    ytd_revenue: MoneyDTO
    active_engagements_count: int
    monthly_hours: Dict[int, Decimal]
    pending_invoices_total: MoneyDTO

    @classmethod
    def from_domain(cls, summary: DashboardSummary) -> "DashboardStatsResponseDTO":
        return cls(
            year=summary.year,
            ytd_revenue=MoneyDTO.from_domain(summary.ytd_revenue),
            active_engagements_count=summary.active_engagements_count,
            monthly_hours=summary.monthly_hours,
            pending_invoices_total=MoneyDTO.from_domain(summary.pending_invoices_total),
        )


class MonthlyRevenueResponseDTO(BaseDTO):
    month: int
    revenue: MoneyDTO
    hours: Decimal

    @classmethod
    def from_domain(cls, row: MonthlyRevenue) -> "MonthlyRevenueResponseDTO":
        return cls(month=row.month, revenue=MoneyDTO.from_domain(row.revenue), hours=row.hours)


class MonthlyRevenueSeriesResponseDTO(BaseDTO):
    year: int
    months: List[MonthlyRevenueResponseDTO]
