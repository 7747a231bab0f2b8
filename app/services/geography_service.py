"""
PayrollHub - Geography Service

Read access to countries and states, and audited CRUD for cities.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.geography import City, Country, State
from app.schemas.common import ApiResponse
from app.services.crud_service import AuditedCrudService


class CityService(AuditedCrudService):
    """Audited CRUD for cities; bulk create skips (name, state) duplicates."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, model=City, module="cities", entity="City", label="city", label_plural="cities")

    async def list_by_state(
        self,
        state_id: Optional[uuid.UUID] = None,
        country_id: Optional[uuid.UUID] = None,
    ) -> ApiResponse:
        query = (
            select(City, State.name)
            .join(State, State.id == City.state_id)
            .order_by(City.name)
        )
        if state_id:
            query = query.where(City.state_id == state_id)
        if country_id:
            query = query.where(City.country_id == country_id)

        result = await self.db.execute(query)
        rows = []
        for city, state_name in result.all():
            row = city.to_dict()
            row["state_name"] = state_name
            rows.append(row)
        return ApiResponse.ok(rows)


class GeographyService:
    """Service for country and state lookups."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_countries(self) -> ApiResponse:
        result = await self.db.execute(select(Country).order_by(Country.name))
        return ApiResponse.ok([c.to_dict() for c in result.scalars().all()])

    async def list_states(self, country_id: Optional[uuid.UUID] = None) -> ApiResponse:
        query = select(State).order_by(State.name)
        if country_id:
            query = query.where(State.country_id == country_id)
        result = await self.db.execute(query)
        return ApiResponse.ok([s.to_dict() for s in result.scalars().all()])
