"""Audit schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditLogRead(BaseModel):
    """Audit log response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    actor_id: str | None
    action: str
    entity_type: str
    entity_id: str | None
    payload: dict
    created_at: datetime
