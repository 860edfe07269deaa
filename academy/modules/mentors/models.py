"""Mentor domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from academy.modules.scheduling.models import WeeklySlot
from academy.shared.utils import new_id, utc_now


@dataclass
class Mentor:
    """Mentor profile linked to a user account (one profile per user)."""

    user_id: str
    display_name: str
    bio: str = ""
    experience_years: int = 0
    hourly_rate: Decimal = Decimal("0")
    specialization: list[str] = field(default_factory=list)
    qualifications: list[str] = field(default_factory=list)
    available_hours: list[WeeklySlot] = field(default_factory=list)
    assigned_courses: list[str] = field(default_factory=list)
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
