"""
Property management API endpoints.
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Response
from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.api.dependencies import get_repository, get_current_owner_id
from app.api.schemas import CamelModel
from app.db.repository import PortfolioRepository

logger = logging.getLogger(__name__)

router = APIRouter()


class PropertyCreate(CamelModel):
    """Schema for creating a property."""

    name: str = Field(min_length=1)
    address: str
    region: str = Field(min_length=1)
    property_type: str
    purchase_price: float = Field(ge=0)
    current_value: float = Field(ge=0)
    monthly_rent: float = Field(ge=0)
    monthly_expenses: float = Field(default=0.0, ge=0)
    building_age: int = Field(ge=0)
    area: float = Field(ge=0)
    is_occupied: bool = True
    purchase_date: datetime


class PropertyUpdate(CamelModel):
    """Schema for updating a property. Only supplied fields change."""

    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    region: Optional[str] = Field(default=None, min_length=1)
    property_type: Optional[str] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    current_value: Optional[float] = Field(default=None, ge=0)
    monthly_rent: Optional[float] = Field(default=None, ge=0)
    monthly_expenses: Optional[float] = Field(default=None, ge=0)
    building_age: Optional[int] = Field(default=None, ge=0)
    area: Optional[float] = Field(default=None, ge=0)
    is_occupied: Optional[bool] = None
    purchase_date: Optional[datetime] = None


class PropertyResponse(CamelModel):
    """Schema for property response."""

    id: int
    name: str
    address: str
    region: str
    property_type: str
    purchase_price: float
    current_value: float
    monthly_rent: float
    monthly_expenses: float
    building_age: int
    area: float
    is_occupied: bool
    purchase_date: datetime
    user_id: int


def _get_or_404(repository: PortfolioRepository, property_id: int):
    prop = repository.get_property(property_id)
    if prop is None:
        logger.warning(f"Property {property_id} not found")
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


@router.get("", response_model=List[PropertyResponse])
async def list_properties(
    repository: PortfolioRepository = Depends(get_repository),
    owner_id: int = Depends(get_current_owner_id),
):
    """List the current owner's properties."""
    return repository.list_properties(owner_id)


@router.post("", response_model=PropertyResponse, status_code=201)
async def create_property(
    property_data: PropertyCreate,
    repository: PortfolioRepository = Depends(get_repository),
    owner_id: int = Depends(get_current_owner_id),
):
    """Create a new property and record it in the activity feed."""
    prop = repository.create_property(owner_id, property_data.model_dump())

    repository.create_activity(
        owner_id,
        {
            "title": "New property added",
            "description": f"Added {prop.name}",
            "activity_type": "income",
            "property_id": prop.id,
        },
    )

    return prop


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: int,
    repository: PortfolioRepository = Depends(get_repository),
):
    """Get a property by ID."""
    return _get_or_404(repository, property_id)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: int,
    property_data: PropertyUpdate,
    repository: PortfolioRepository = Depends(get_repository),
):
    """Update a property."""
    update_data = property_data.model_dump(exclude_unset=True, exclude_none=True)
    prop = repository.update_property(property_id, update_data)

    if prop is None:
        logger.warning(f"Property {property_id} not found")
        raise HTTPException(status_code=404, detail="Property not found")

    return prop


@router.delete("/{property_id}", status_code=204)
async def delete_property(
    property_id: int,
    repository: PortfolioRepository = Depends(get_repository),
):
    """Delete a property."""
    if not repository.delete_property(property_id):
        logger.warning(f"Property {property_id} not found")
        raise HTTPException(status_code=404, detail="Property not found")

    return Response(status_code=204)
