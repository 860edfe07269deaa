"""Scheduling schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from academy.modules.scheduling.intervals import to_minutes
from academy.modules.scheduling.models import WeeklySlot

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class WeeklySlotSchema(BaseModel):
    """Weekly slot payload (0=Sunday, HH:MM times, start before end)."""

    model_config = ConfigDict(from_attributes=True)

    day_of_week: int = Field(ge=0, le=6)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def validate_window(self) -> "WeeklySlotSchema":
        """Reject empty or inverted windows."""
        if to_minutes(self.start_time) >= to_minutes(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

    def to_model(self) -> WeeklySlot:
        return WeeklySlot(
            day_of_week=self.day_of_week,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class ConflictCheckRequest(BaseModel):
    """Candidate schedule for a classroom."""

    classroom_id: str
    schedule: list[WeeklySlotSchema] = Field(min_length=1)
    exclude_course_id: str | None = None


class ConflictingCourseRead(BaseModel):
    """Course that occupies an overlapping slot."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    classroom_id: str
    mentor_id: str
    schedule: list[WeeklySlotSchema]


class ConflictCheckRead(BaseModel):
    """Schedule conflict check result."""

    has_conflict: bool
    conflicting_courses: list[ConflictingCourseRead]


class AvailabilityCheckRequest(WeeklySlotSchema):
    """Requested window in a classroom."""

    classroom_id: str


class AvailabilityRead(BaseModel):
    """Classroom availability result."""

    classroom_id: str
    day_of_week: int
    start_time: str
    end_time: str
    available: bool


class ClassroomScheduleEntryRead(BaseModel):
    """Published classroom slot response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    classroom_id: str
    course_id: str
    course_name: str
    mentor_name: str
    day_of_week: int
    start_time: str
    end_time: str
    is_recurring: bool
