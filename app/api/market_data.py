"""
Market data API endpoints.

Serves the fixed sample regions and the placeholder price prediction.
"""

from fastapi import APIRouter, Depends
from typing import List
from datetime import datetime

from app.api.dependencies import get_repository
from app.api.schemas import CamelModel
from app.db.repository import PortfolioRepository

router = APIRouter()

# Static stand-in for a prediction service
PLACEHOLDER_PREDICTIONS = {
    "ai_price": 45200000,
    "expected_yield": 5.4,
    "confidence": 87,
}


class MarketDataResponse(CamelModel):
    """Schema for a market data row."""

    id: int
    region: str
    average_price_per_sqm: float
    vacancy_rate: float
    property_count: int
    monthly_change_percent: float
    record_date: datetime


class MarketInsights(CamelModel):
    """Placeholder price prediction."""

    ai_price: float
    expected_yield: float
    confidence: float


@router.get("", response_model=List[MarketDataResponse])
async def list_market_data(repository: PortfolioRepository = Depends(get_repository)):
    """List market data for all regions."""
    return repository.list_market_data()


@router.get("/insights", response_model=MarketInsights)
async def get_market_insights():
    """Return the static prediction figures."""
    return MarketInsights(**PLACEHOLDER_PREDICTIONS)


@router.get("/region/{region}", response_model=List[MarketDataResponse])
async def list_market_data_by_region(
    region: str,
    repository: PortfolioRepository = Depends(get_repository),
):
    """List market data for one region. Unknown regions give an empty list."""
    return repository.list_market_data_by_region(region)
