"""
Activity feed API endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import Field
from typing import Literal, List, Optional
from datetime import datetime

from app.api.dependencies import get_repository, get_current_owner_id
from app.api.schemas import CamelModel
from app.db.repository import PortfolioRepository

router = APIRouter()

ActivityType = Literal["income", "expense", "tenant_change", "maintenance"]


class ActivityCreate(CamelModel):
    """Schema for creating an activity."""

    title: str = Field(min_length=1)
    description: str
    activity_type: ActivityType
    amount: Optional[float] = None
    property_id: Optional[int] = None


class ActivityResponse(CamelModel):
    """Schema for activity response."""

    id: int
    title: str
    description: str
    activity_type: str
    amount: Optional[float]
    property_id: Optional[int]
    user_id: int
    created_at: datetime


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    repository: PortfolioRepository = Depends(get_repository),
    owner_id: int = Depends(get_current_owner_id),
):
    """List the current owner's activities, newest first."""
    return repository.list_activities(owner_id)


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_activity(
    activity_data: ActivityCreate,
    repository: PortfolioRepository = Depends(get_repository),
    owner_id: int = Depends(get_current_owner_id),
):
    """Record an activity."""
    return repository.create_activity(owner_id, activity_data.model_dump())
