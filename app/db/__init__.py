"""
Storage layer: ORM models and the portfolio repository.
"""

from app.db.database import create_db_engine, create_session_factory
from app.db.models import Base, PortfolioProperty, MarketData, Activity
from app.db.repository import PortfolioRepository

__all__ = [
    "create_db_engine",
    "create_session_factory",
    "Base",
    "PortfolioProperty",
    "MarketData",
    "Activity",
    "PortfolioRepository",
]
