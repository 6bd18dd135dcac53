"""
FastAPI dependencies shared by the API routers.
"""

from fastapi import Request

from app.config import get_settings
from app.db.repository import PortfolioRepository


def get_repository(request: Request) -> PortfolioRepository:
    """Repository created by the application lifespan."""
    return request.app.state.repository


def get_current_owner_id() -> int:
    """Owner for the request. There is no authentication, so this is fixed."""
    return get_settings().default_owner_id
