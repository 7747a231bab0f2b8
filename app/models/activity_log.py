"""
PayrollHub - Activity Log Model

Append-only audit trail written after every mutation. Rows are never updated
or deleted by application code.
"""

import uuid
from enum import Enum
from typing import Any, Optional

from sqlalchemy import ForeignKey, JSON, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class ActivityAction(str, Enum):
    """Kind of mutation being recorded."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ActivityStatus(str, Enum):
    """Outcome of the recorded attempt."""
    SUCCESS = "success"
    FAILURE = "failure"


class ActivityLog(BaseModel):
    """
    One audit entry: who did what to which entity and whether it succeeded.

    old_values / new_values hold JSON snapshots of the row before the change
    and of the submitted payload.
    """

    __tablename__ = "activity_logs"

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    action: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    module: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    entity_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    old_values: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    new_values: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return f"<ActivityLog(action={self.action}, module={self.module}, status={self.status})>"
