"""
PayrollHub - Activity Log Service

Audit trail for every mutation. Writing is a two-step protocol: the primary
operation commits (or rolls back) first, then emits an ``ActivityEvent`` that
``ActivityLogService.record`` persists on a best-effort basis. A failed audit
write is logged and never propagates to the caller.
"""

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity_log import ActivityAction, ActivityLog, ActivityStatus
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class AuditContext:
    """Request-level facts attached to every activity log entry."""
    user_id: Optional[uuid.UUID] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass
class ActivityEvent:
    """Outcome of one mutation attempt."""
    action: str
    module: str
    entity: str
    status: str
    description: str
    entity_id: Optional[str] = None
    old_values: Any = None
    new_values: Any = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, action: ActivityAction, module: str, entity: str, description: str, **kwargs) -> "ActivityEvent":
        return cls(
            action=action.value,
            module=module,
            entity=entity,
            status=ActivityStatus.SUCCESS.value,
            description=description,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        action: ActivityAction,
        module: str,
        entity: str,
        description: str,
        error: Exception,
        **kwargs,
    ) -> "ActivityEvent":
        return cls(
            action=action.value,
            module=module,
            entity=entity,
            status=ActivityStatus.FAILURE.value,
            description=description,
            error_message=str(getattr(error, "orig", None) or error),
            **kwargs,
        )


class ActivityLogService:
    """Persists and browses activity log entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(self, event: ActivityEvent, ctx: Optional[AuditContext] = None) -> Optional[ActivityLog]:
        """
        Persist one audit entry in its own commit.

        Returns the stored entry, or None when the write failed.
        """
        ctx = ctx or AuditContext()
        try:
            user_id = await self._existing_user_id(ctx.user_id)
            entry = ActivityLog(
                user_id=user_id,
                action=event.action,
                module=event.module,
                entity=event.entity,
                entity_id=str(event.entity_id) if event.entity_id is not None else None,
                description=event.description,
                old_values=jsonable_encoder(event.old_values) if event.old_values is not None else None,
                new_values=jsonable_encoder(event.new_values) if event.new_values is not None else None,
                error_message=event.error_message,
                ip_address=ctx.ip_address,
                user_agent=ctx.user_agent,
                status=event.status,
            )
            self.db.add(entry)
            await self.db.commit()
            return entry
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(
                "Failed to write activity log (%s %s): %s",
                event.action, event.module, e,
            )
            return None

    async def _existing_user_id(self, user_id: Optional[uuid.UUID]) -> Optional[uuid.UUID]:
        # Entries for deleted or unknown users are kept without the reference
        if user_id is None:
            return None
        result = await self.db.execute(select(User.id).where(User.id == user_id))
        found = result.scalar_one_or_none()
        if found is None:
            logger.warning("Activity log user %s not found, storing entry without user", user_id)
        return found

    async def list_logs(
        self,
        page: int = 1,
        limit: int = 20,
        action: Optional[str] = None,
        module: Optional[str] = None,
        search: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        """
        Page through activity logs, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            action: Filter by action (create/update/delete)
            module: Filter by module slug
            search: Case-insensitive match on description or IP address
            start_date: Inclusive lower bound on created_at
            end_date: Inclusive upper bound on created_at (whole day)
        """
        filters = []
        if action:
            filters.append(ActivityLog.action == action)
        if module:
            filters.append(ActivityLog.module == module)
        if search:
            pattern = f"%{search}%"
            filters.append(or_(
                ActivityLog.description.ilike(pattern),
                ActivityLog.ip_address.ilike(pattern),
            ))
        if start_date:
            filters.append(ActivityLog.created_at >= datetime.combine(start_date, time.min))
        if end_date:
            filters.append(ActivityLog.created_at < datetime.combine(end_date + timedelta(days=1), time.min))

        count_query = select(func.count(ActivityLog.id)).where(*filters)
        total = (await self.db.execute(count_query)).scalar_one()

        query = (
            select(ActivityLog, User.email, User.first_name, User.last_name)
            .outerjoin(User, User.id == ActivityLog.user_id)
            .where(*filters)
            .order_by(ActivityLog.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.db.execute(query)

        logs = []
        for log, email, first_name, last_name in result.all():
            item = log.to_dict()
            item["user"] = (
                {"id": log.user_id, "email": email, "first_name": first_name, "last_name": last_name}
                if log.user_id else None
            )
            logs.append(item)

        return {
            "logs": logs,
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit) if limit else 0,
        }
