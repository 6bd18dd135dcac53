"""
API routes for the investment dashboard.
"""

from fastapi import APIRouter

from app.api import properties, market_data, activities, portfolio, calculations

router = APIRouter()

# Include sub-routers
router.include_router(properties.router, prefix="/properties", tags=["properties"])
router.include_router(market_data.router, prefix="/market-data", tags=["market-data"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(portfolio.router, prefix="/portfolio", tags=["portfolio"])
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
