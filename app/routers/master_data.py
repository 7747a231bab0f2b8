"""
PayrollHub - Master Data Router

Builds the same set of endpoints for every registered lookup resource:

    GET    /api/<slug>            list (optional ?status=)
    POST   /api/<slug>            create
    POST   /api/<slug>/bulk       bulk create, duplicates skipped
    PUT    /api/<slug>/bulk       bulk partial update
    DELETE /api/<slug>/bulk       bulk delete
    GET    /api/<slug>/{id}       get
    PUT    /api/<slug>/{id}       partial update
    DELETE /api/<slug>/{id}       delete
"""

from typing import List, Optional, Tuple
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field, create_model
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_audit_context, get_current_active_user
from app.models.user import User
from app.schemas.common import ApiResponse, BulkIdsRequest, StatusValue
from app.services.audit_service import AuditContext
from app.services.master_data_service import MASTER_RESOURCES, MasterResource


def build_master_router(resource: MasterResource) -> APIRouter:
    """Router with audited CRUD endpoints for one lookup resource."""
    router = APIRouter()

    CreateSchema = resource.create_schema
    UpdateSchema = resource.update_schema
    BulkCreateRequest = create_model(
        f"{resource.entity}BulkCreateRequest",
        items=(List[CreateSchema], Field(..., min_length=1)),
    )
    BulkUpdateItem = create_model(
        f"{resource.entity}BulkUpdateItem",
        __base__=UpdateSchema,
        id=(UUID, ...),
    )
    BulkUpdateRequest = create_model(
        f"{resource.entity}BulkUpdateRequest",
        items=(List[BulkUpdateItem], Field(..., min_length=1)),
    )

    @router.get("", response_model=ApiResponse, summary=f"List {resource.label_plural or resource.label + 's'}")
    async def list_items(
        status_filter: Optional[StatusValue] = Query(None, alias="status"),
        db: AsyncSession = Depends(get_async_session),
        _: User = Depends(get_current_active_user),
    ):
        return await resource.service(db).list({"status": status_filter})

    @router.post("/bulk", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
    async def create_bulk(
        request: BulkCreateRequest,
        db: AsyncSession = Depends(get_async_session),
        ctx: AuditContext = Depends(get_audit_context),
    ):
        return await resource.service(db).create_bulk(request.items, ctx)

    @router.put("/bulk", response_model=ApiResponse)
    async def update_bulk(
        request: BulkUpdateRequest,
        db: AsyncSession = Depends(get_async_session),
        ctx: AuditContext = Depends(get_audit_context),
    ):
        return await resource.service(db).update_bulk(request.items, ctx)

    @router.delete("/bulk", response_model=ApiResponse)
    async def remove_bulk(
        request: BulkIdsRequest,
        db: AsyncSession = Depends(get_async_session),
        ctx: AuditContext = Depends(get_audit_context),
    ):
        return await resource.service(db).remove_bulk(request.ids, ctx)

    @router.get("/{item_id}", response_model=ApiResponse)
    async def get_item(
        item_id: UUID,
        db: AsyncSession = Depends(get_async_session),
        _: User = Depends(get_current_active_user),
    ):
        return await resource.service(db).get(item_id)

    @router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
    async def create_item(
        request: CreateSchema,
        db: AsyncSession = Depends(get_async_session),
        ctx: AuditContext = Depends(get_audit_context),
    ):
        return await resource.service(db).create(request, ctx)

    @router.put("/{item_id}", response_model=ApiResponse)
    async def update_item(
        item_id: UUID,
        request: UpdateSchema,
        db: AsyncSession = Depends(get_async_session),
        ctx: AuditContext = Depends(get_audit_context),
    ):
        return await resource.service(db).update(item_id, request, ctx)

    @router.delete("/{item_id}", response_model=ApiResponse)
    async def remove_item(
        item_id: UUID,
        db: AsyncSession = Depends(get_async_session),
        ctx: AuditContext = Depends(get_audit_context),
    ):
        return await resource.service(db).remove(item_id, ctx)

    return router


master_routers: List[Tuple[MasterResource, APIRouter]] = [
    (resource, build_master_router(resource)) for resource in MASTER_RESOURCES
]
