"""
PayrollHub - Common Schemas

Response envelope and request shapes shared by every resource.
"""

from typing import Any, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field


StatusValue = Literal["active", "inactive"]


class ApiResponse(BaseModel):
    """
    Standard response envelope.

    ``status`` is the success signal clients consume; logical failures
    (not found, constraint conflicts) come back as ``status: false`` with a
    message rather than as an HTTP error.
    """
    status: bool
    data: Any = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ApiResponse":
        return cls(status=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(status=False, data=data, message=message)


class BulkIdsRequest(BaseModel):
    """Identifiers for a bulk delete."""
    ids: List[UUID] = Field(..., min_length=1)
