"""Audit log models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from academy.shared.utils import new_id, utc_now


@dataclass(frozen=True)
class AuditLog:
    """Immutable audit log entry."""

    action: str
    entity_type: str
    entity_id: str | None
    actor_id: str | None = None
    payload: dict = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
