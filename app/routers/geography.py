"""
PayrollHub - Geography Router

Countries and provinces are read-only (populated by the seed script);
cities support full CRUD plus bulk creation.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_audit_context, get_current_active_user
from app.models.user import User
from app.schemas.common import ApiResponse, BulkIdsRequest
from app.schemas.geography import CityBulkCreateRequest, CityCreate, CityUpdate
from app.services.audit_service import AuditContext
from app.services.geography_service import CityService, GeographyService
from app.services.province_resolver import resolve_province


router = APIRouter()


@router.get("/countries", response_model=ApiResponse)
async def list_countries(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await GeographyService(db).list_countries()


@router.get("/states", response_model=ApiResponse)
async def list_states(
    country_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await GeographyService(db).list_states(country_id)


@router.get("/provinces/resolve", response_model=ApiResponse, summary="Resolve a city's province")
async def resolve_city_province(
    name: str = Query(..., min_length=1),
    lat: Optional[float] = Query(None),
    lng: Optional[float] = Query(None),
    _: User = Depends(get_current_active_user),
):
    """Province for a city name and optional coordinates, as used by the city seed."""
    return ApiResponse.ok({"name": name, "province": resolve_province(name, lat, lng)})


@router.get("/cities", response_model=ApiResponse)
async def list_cities(
    state_id: Optional[UUID] = Query(None),
    country_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await CityService(db).list_by_state(state_id, country_id)


@router.post("/cities/bulk", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_cities(
    request: CityBulkCreateRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    """Insert several cities; names already present in the same state are skipped."""
    return await CityService(db).create_bulk(request.items, ctx)


@router.delete("/cities/bulk", response_model=ApiResponse)
async def delete_cities(
    request: BulkIdsRequest,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await CityService(db).remove_bulk(request.ids, ctx)


@router.post("/cities", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_city(
    request: CityCreate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await CityService(db).create(request, ctx)


@router.get("/cities/{city_id}", response_model=ApiResponse)
async def get_city(
    city_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(get_current_active_user),
):
    return await CityService(db).get(city_id)


@router.put("/cities/{city_id}", response_model=ApiResponse)
async def update_city(
    city_id: UUID,
    request: CityUpdate,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await CityService(db).update(city_id, request, ctx)


@router.delete("/cities/{city_id}", response_model=ApiResponse)
async def delete_city(
    city_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    ctx: AuditContext = Depends(get_audit_context),
):
    return await CityService(db).remove(city_id, ctx)
