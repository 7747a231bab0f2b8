"""
PayrollHub - Audited CRUD Service

One implementation of list / get / create / update / remove and their bulk
variants, bound to a model per resource. Every mutation commits (or rolls
back) first and then records an activity log entry describing the outcome.

Persistence failures (unique or foreign key violations) never raise out of
this service; they are audited and returned as ``status: false``.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Type

from pydantic import BaseModel as Schema
from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityAction
from app.models.base import BaseModel
from app.schemas.common import ApiResponse
from app.services.audit_service import ActivityEvent, ActivityLogService, AuditContext
from app.utils.error_handling import ValidationException

logger = logging.getLogger(__name__)


def dialect_insert(db: AsyncSession, table):
    """INSERT construct that supports ON CONFLICT DO NOTHING for the bound dialect."""
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert(table)
    return postgresql.insert(table)


class AuditedCrudService:
    """
    Audit-logged CRUD for one model.

    Args:
        db: Session for the current request
        model: Mapped class
        module: Activity log module slug, e.g. ``allowance-heads``
        entity: Activity log entity name, e.g. ``AllowanceHead``
        label: Human label used in messages, e.g. ``allowance head``
        label_plural: Plural label, defaults to ``label + "s"``
    """

    default_order = "created_at"

    def __init__(
        self,
        db: AsyncSession,
        model: Type[BaseModel],
        module: str,
        entity: str,
        label: str,
        label_plural: Optional[str] = None,
    ):
        self.db = db
        self.model = model
        self.module = module
        self.entity = entity
        self.label = label
        self.label_plural = label_plural or f"{label}s"
        self.audit = ActivityLogService(db)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @property
    def _tracks_actor(self) -> bool:
        return hasattr(self.model, "created_by_id")

    @staticmethod
    def _display(values: Dict[str, Any]) -> str:
        for key in ("name", "employee_code", "code"):
            if values.get(key):
                return str(values[key])
        return str(values.get("id", ""))

    def _title(self) -> str:
        return self.label[:1].upper() + self.label[1:]

    async def _record(self, event: ActivityEvent, ctx: AuditContext) -> None:
        await self.audit.record(event, ctx)

    async def _failed(
        self,
        action: ActivityAction,
        verb: str,
        error: SQLAlchemyError,
        ctx: AuditContext,
        **values,
    ) -> ApiResponse:
        await self.db.rollback()
        logger.warning("Failed to %s %s: %s", verb, self.label, error)
        await self._record(
            ActivityEvent.failure(
                action, self.module, self.entity,
                f"Failed to {verb} {self.label}",
                error,
                **values,
            ),
            ctx,
        )
        return ApiResponse.fail(f"Failed to {verb} {self.label}")

    def validate_row(self, obj: BaseModel) -> None:
        """Rules over the merged row, checked before an update commits."""

    async def _apply(self, obj: BaseModel, changes: Dict[str, Any], ctx: AuditContext) -> None:
        for key, value in changes.items():
            setattr(obj, key, value)
        if self._tracks_actor:
            obj.updated_by_id = ctx.user_id
        try:
            self.validate_row(obj)
        except ValidationException:
            await self.db.rollback()
            raise

    async def fetch(self, id: uuid.UUID) -> Optional[BaseModel]:
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def list(self, filters: Optional[Dict[str, Any]] = None) -> ApiResponse:
        """All rows, newest first, optionally filtered by column equality."""
        query = select(self.model)
        for key, value in (filters or {}).items():
            if value is not None:
                query = query.where(getattr(self.model, key) == value)
        query = query.order_by(getattr(self.model, self.default_order).desc())

        result = await self.db.execute(query)
        return ApiResponse.ok([row.to_dict() for row in result.scalars().all()])

    async def get(self, id: uuid.UUID) -> ApiResponse:
        obj = await self.fetch(id)
        if obj is None:
            return ApiResponse.fail(f"{self._title()} not found")
        return ApiResponse.ok(obj.to_dict())

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------

    async def create(self, payload: Schema, ctx: Optional[AuditContext] = None) -> ApiResponse:
        ctx = ctx or AuditContext()
        data = payload.model_dump()

        obj = self.model(**data)
        if self._tracks_actor:
            obj.created_by_id = ctx.user_id
        self.db.add(obj)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._failed(ActivityAction.CREATE, "create", e, ctx, new_values=data)

        await self.db.refresh(obj)
        row = obj.to_dict()
        await self._record(
            ActivityEvent.success(
                ActivityAction.CREATE, self.module, self.entity,
                f"Created {self.label} {self._display(row)}",
                entity_id=str(obj.id),
                new_values=data,
            ),
            ctx,
        )
        return ApiResponse.ok(row, f"{self._title()} created successfully")

    async def create_bulk(self, items: Sequence[Schema], ctx: Optional[AuditContext] = None) -> ApiResponse:
        """
        Insert many rows in one statement, skipping rows that collide with
        an existing unique key. Returns the number actually inserted.
        """
        ctx = ctx or AuditContext()
        now = datetime.now(timezone.utc)
        payloads = [item.model_dump() for item in items]

        rows = []
        for data in payloads:
            row = dict(data, id=uuid.uuid4(), created_at=now, updated_at=now)
            if self._tracks_actor:
                row["created_by_id"] = ctx.user_id
            rows.append(row)

        stmt = dialect_insert(self.db, self.model.__table__).values(rows).on_conflict_do_nothing()
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._failed(ActivityAction.CREATE, "bulk create", e, ctx, new_values=payloads)

        inserted = result.rowcount
        await self._record(
            ActivityEvent.success(
                ActivityAction.CREATE, self.module, self.entity,
                f"Bulk created {self.label_plural} ({inserted})",
                new_values=payloads,
            ),
            ctx,
        )
        return ApiResponse.ok(
            {"count": inserted, "skipped": len(rows) - inserted},
            f"{inserted} {self.label_plural} created successfully",
        )

    async def update(self, id: uuid.UUID, payload: Schema, ctx: Optional[AuditContext] = None) -> ApiResponse:
        """Apply only the fields present in the payload."""
        ctx = ctx or AuditContext()
        obj = await self.fetch(id)
        if obj is None:
            return ApiResponse.fail(f"{self._title()} not found")

        old_values = obj.to_dict()
        changes = payload.model_dump(exclude_unset=True)
        await self._apply(obj, changes, ctx)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._failed(
                ActivityAction.UPDATE, "update", e, ctx,
                entity_id=str(id), old_values=old_values, new_values=changes,
            )

        await self.db.refresh(obj)
        row = obj.to_dict()
        await self._record(
            ActivityEvent.success(
                ActivityAction.UPDATE, self.module, self.entity,
                f"Updated {self.label} {self._display(row)}",
                entity_id=str(id),
                old_values=old_values,
                new_values=changes,
            ),
            ctx,
        )
        return ApiResponse.ok(row, f"{self._title()} updated successfully")

    async def update_bulk(self, items: Sequence[Schema], ctx: Optional[AuditContext] = None) -> ApiResponse:
        """
        Apply several partial updates in one transaction. Each item carries
        its ``id``; any missing id aborts the whole batch.
        """
        ctx = ctx or AuditContext()
        old_values: List[Dict[str, Any]] = []
        new_values: List[Dict[str, Any]] = []
        updated = []

        for item in items:
            changes = item.model_dump(exclude_unset=True)
            item_id = changes.pop("id")
            obj = await self.fetch(item_id)
            if obj is None:
                await self.db.rollback()
                return ApiResponse.fail(f"{self._title()} {item_id} not found")

            old_values.append(obj.to_dict())
            await self._apply(obj, changes, ctx)
            new_values.append(dict(changes, id=item_id))
            updated.append(obj)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._failed(
                ActivityAction.UPDATE, "bulk update", e, ctx,
                old_values=old_values, new_values=new_values,
            )

        for obj in updated:
            await self.db.refresh(obj)
        rows = [obj.to_dict() for obj in updated]
        await self._record(
            ActivityEvent.success(
                ActivityAction.UPDATE, self.module, self.entity,
                f"Bulk updated {self.label_plural} ({len(rows)})",
                old_values=old_values,
                new_values=new_values,
            ),
            ctx,
        )
        return ApiResponse.ok(rows, f"{len(rows)} {self.label_plural} updated successfully")

    async def remove(self, id: uuid.UUID, ctx: Optional[AuditContext] = None) -> ApiResponse:
        ctx = ctx or AuditContext()
        obj = await self.fetch(id)
        if obj is None:
            return ApiResponse.fail(f"{self._title()} not found")

        old_values = obj.to_dict()
        await self.db.delete(obj)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._failed(
                ActivityAction.DELETE, "delete", e, ctx,
                entity_id=str(id), old_values=old_values,
            )

        await self._record(
            ActivityEvent.success(
                ActivityAction.DELETE, self.module, self.entity,
                f"Deleted {self.label} {self._display(old_values)}",
                entity_id=str(id),
                old_values=old_values,
            ),
            ctx,
        )
        return ApiResponse.ok(message=f"{self._title()} deleted successfully")

    async def remove_bulk(self, ids: Sequence[uuid.UUID], ctx: Optional[AuditContext] = None) -> ApiResponse:
        ctx = ctx or AuditContext()
        result = await self.db.execute(select(self.model).where(self.model.id.in_(list(ids))))
        existing = result.scalars().all()
        if not existing:
            return ApiResponse.fail(f"No {self.label_plural} found")

        old_values = [obj.to_dict() for obj in existing]
        found_ids = [obj.id for obj in existing]
        try:
            await self.db.execute(delete(self.model).where(self.model.id.in_(found_ids)))
            await self.db.commit()
        except SQLAlchemyError as e:
            return await self._failed(ActivityAction.DELETE, "bulk delete", e, ctx, old_values=old_values)

        await self._record(
            ActivityEvent.success(
                ActivityAction.DELETE, self.module, self.entity,
                f"Bulk deleted {self.label_plural} ({len(found_ids)})",
                old_values=old_values,
            ),
            ctx,
        )
        return ApiResponse.ok(
            {"count": len(found_ids)},
            f"{len(found_ids)} {self.label_plural} deleted successfully",
        )
