"""
Portfolio analytics API endpoints.

Figures are recomputed from the repository on every request.
"""

from fastapi import APIRouter, Depends
from typing import List

from app.api.dependencies import get_repository, get_current_owner_id
from app.api.schemas import CamelModel
from app.calculations.portfolio import (
    calculate_portfolio_analytics,
    calculate_property_yield,
    summarize_by_region,
)
from app.db.repository import PortfolioRepository

router = APIRouter()


class PortfolioAnalyticsResponse(CamelModel):
    """Dashboard KPI figures. ``monthly_income`` is net of expenses."""

    total_value: float
    monthly_income: float
    average_yield: float
    vacancy_rate: float
    property_count: int
    occupied_count: int
    vacant_count: int


class PropertyYield(CamelModel):
    """Gross yield of one property on its current value."""

    id: int
    name: str
    gross_yield: float


class RegionSummary(CamelModel):
    """Property count and total value for one region."""

    region: str
    count: int
    value: float


class PortfolioBreakdownResponse(CamelModel):
    """Per-property yields and per-region totals."""

    yields: List[PropertyYield]
    regions: List[RegionSummary]


@router.get("/analytics", response_model=PortfolioAnalyticsResponse)
async def get_portfolio_analytics(
    repository: PortfolioRepository = Depends(get_repository),
    owner_id: int = Depends(get_current_owner_id),
):
    """Aggregate the owner's portfolio."""
    analytics = calculate_portfolio_analytics(repository.list_properties(owner_id))

    return PortfolioAnalyticsResponse(
        total_value=analytics.total_value,
        monthly_income=analytics.net_monthly_income,
        average_yield=analytics.average_yield,
        vacancy_rate=analytics.vacancy_rate,
        property_count=analytics.property_count,
        occupied_count=analytics.occupied_count,
        vacant_count=analytics.vacant_count,
    )


@router.get("/breakdown", response_model=PortfolioBreakdownResponse)
async def get_portfolio_breakdown(
    repository: PortfolioRepository = Depends(get_repository),
    owner_id: int = Depends(get_current_owner_id),
):
    """Gross yield per property and value distribution per region."""
    properties = repository.list_properties(owner_id)

    return PortfolioBreakdownResponse(
        yields=[
            PropertyYield(
                id=p.id,
                name=p.name,
                gross_yield=calculate_property_yield(p.monthly_rent, p.current_value),
            )
            for p in properties
        ],
        regions=[RegionSummary(**r) for r in summarize_by_region(properties)],
    )
