"""Students schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class EmergencyContactSchema(BaseModel):
    """Emergency contact payload."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(min_length=1, max_length=128)
    phone: str = Field(min_length=1, max_length=32)
    relationship: str = Field(min_length=1, max_length=64)


class StudentCreate(BaseModel):
    """Create student request."""

    parent_id: str = Field(min_length=1)
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    academic_level: str = Field(default="", max_length=64)
    date_of_birth: date | None = None
    email: str | None = Field(default=None, max_length=256)
    phone: str | None = Field(default=None, max_length=32)
    address: str = Field(default="", max_length=512)
    emergency_contact: EmergencyContactSchema | None = None
    is_active: bool = True


class StudentUpdate(BaseModel):
    """Update student request."""

    parent_id: str | None = Field(default=None, min_length=1)
    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    academic_level: str | None = Field(default=None, max_length=64)
    date_of_birth: date | None = None
    email: str | None = Field(default=None, max_length=256)
    phone: str | None = Field(default=None, max_length=32)
    address: str | None = Field(default=None, max_length=512)
    emergency_contact: EmergencyContactSchema | None = None
    is_active: bool | None = None


class StudentRead(BaseModel):
    """Student response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    first_name: str
    last_name: str
    academic_level: str
    date_of_birth: date | None
    email: str | None
    phone: str | None
    address: str
    emergency_contact: EmergencyContactSchema | None
    enrolled_courses: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
