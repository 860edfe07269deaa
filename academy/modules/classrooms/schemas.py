"""Classrooms schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClassroomCreate(BaseModel):
    """Create classroom request."""

    name: str = Field(min_length=1, max_length=128)
    capacity: int = Field(ge=1)
    location: str = Field(default="", max_length=256)
    description: str | None = Field(default=None, max_length=5000)
    equipment: list[str] = Field(default_factory=list)
    is_active: bool = True


class ClassroomUpdate(BaseModel):
    """Update classroom request."""

    name: str | None = Field(default=None, min_length=1, max_length=128)
    capacity: int | None = Field(default=None, ge=1)
    location: str | None = Field(default=None, max_length=256)
    description: str | None = Field(default=None, max_length=5000)
    equipment: list[str] | None = None
    is_active: bool | None = None


class ClassroomRead(BaseModel):
    """Classroom response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    capacity: int
    location: str
    description: str | None
    equipment: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
