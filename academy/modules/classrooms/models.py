"""Classroom domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from academy.shared.utils import new_id, utc_now


@dataclass
class Classroom:
    """Physical room that hosts course sessions."""

    name: str
    capacity: int
    location: str = ""
    description: str | None = None
    equipment: list[str] = field(default_factory=list)
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
