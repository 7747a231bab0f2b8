"""
PayrollHub - Geography Schemas
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.common import StatusValue
from app.schemas.master_data import MasterListCreate, MasterListUpdate


class CityCreate(BaseModel):
    """Schema for creating a city."""
    name: str = Field(..., min_length=1, max_length=150)
    country_id: UUID
    state_id: UUID
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: StatusValue = "active"


class CityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    country_id: Optional[UUID] = None
    state_id: Optional[UUID] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    status: Optional[StatusValue] = None


class CityBulkCreateRequest(BaseModel):
    items: List[CityCreate] = Field(..., min_length=1)


class LocationCreate(MasterListCreate):
    address: Optional[str] = None
    city_id: Optional[UUID] = None


class LocationUpdate(MasterListUpdate):
    address: Optional[str] = None
    city_id: Optional[UUID] = None
