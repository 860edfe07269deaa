"""Mentors schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from academy.modules.scheduling.schemas import WeeklySlotSchema


class MentorCreate(BaseModel):
    """Create mentor profile request."""

    user_id: str = Field(min_length=1)
    display_name: str = Field(min_length=2, max_length=128)
    bio: str = Field(default="", max_length=5000)
    experience_years: int = Field(default=0, ge=0, le=80)
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0)
    specialization: list[str] = Field(default_factory=list)
    qualifications: list[str] = Field(default_factory=list)
    available_hours: list[WeeklySlotSchema] = Field(default_factory=list)
    is_active: bool = True


class MentorUpdate(BaseModel):
    """Update mentor profile request."""

    display_name: str | None = Field(default=None, min_length=2, max_length=128)
    bio: str | None = Field(default=None, max_length=5000)
    experience_years: int | None = Field(default=None, ge=0, le=80)
    hourly_rate: Decimal | None = Field(default=None, ge=0)
    specialization: list[str] | None = None
    qualifications: list[str] | None = None
    available_hours: list[WeeklySlotSchema] | None = None
    is_active: bool | None = None


class MentorRead(BaseModel):
    """Mentor profile response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    display_name: str
    bio: str
    experience_years: int
    hourly_rate: Decimal
    specialization: list[str]
    qualifications: list[str]
    available_hours: list[WeeklySlotSchema]
    assigned_courses: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
