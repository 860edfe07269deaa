"""Courses schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from academy.core.enums import CourseLevelEnum, CourseStatusEnum
from academy.modules.scheduling.schemas import WeeklySlotSchema


class CourseCreate(BaseModel):
    """Create course request."""

    name: str = Field(min_length=1, max_length=256)
    description: str = Field(default="", max_length=5000)
    classroom_id: str = Field(min_length=1)
    mentor_id: str = ""
    duration_weeks: int = Field(default=0, ge=0)
    max_students: int = Field(ge=1)
    schedule: list[WeeklySlotSchema] = Field(default_factory=list)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    level: CourseLevelEnum = CourseLevelEnum.BEGINNER
    category: str = Field(default="", max_length=128)
    status: CourseStatusEnum = CourseStatusEnum.ACTIVE
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def validate_dates(self) -> "CourseCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class CourseUpdate(BaseModel):
    """Partial course update request.

    ``mentor_id=""`` releases the course from its mentor without touching status.
    """

    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = Field(default=None, max_length=5000)
    classroom_id: str | None = Field(default=None, min_length=1)
    mentor_id: str | None = None
    duration_weeks: int | None = Field(default=None, ge=0)
    max_students: int | None = Field(default=None, ge=1)
    schedule: list[WeeklySlotSchema] | None = None
    price: Decimal | None = Field(default=None, ge=0)
    level: CourseLevelEnum | None = None
    category: str | None = Field(default=None, max_length=128)
    status: CourseStatusEnum | None = None
    start_date: date | None = None
    end_date: date | None = None


class CourseRead(BaseModel):
    """Course response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    classroom_id: str
    mentor_id: str
    duration_weeks: int
    max_students: int
    current_students: int
    enrolled_students: list[str]
    schedule: list[WeeklySlotSchema]
    price: Decimal
    level: CourseLevelEnum
    category: str
    status: CourseStatusEnum
    start_date: date | None
    end_date: date | None
    created_at: datetime
    updated_at: datetime


class BulkCourseStatusUpdate(BaseModel):
    """Bulk course status change request."""

    course_ids: list[str] = Field(min_length=1)
    status: CourseStatusEnum


class BulkCourseStatusRead(BaseModel):
    """Bulk course status change result."""

    updated: int
    failed: int
