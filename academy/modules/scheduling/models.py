"""Scheduling domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from academy.modules.courses.models import Course


@dataclass(frozen=True, slots=True)
class WeeklySlot:
    """Recurring weekly time window, e.g. Monday 10:00-11:30.

    ``day_of_week`` follows the 0=Sunday convention; times are ``HH:MM`` and the
    window is half-open (``end_time`` itself is not occupied).
    """

    day_of_week: int
    start_time: str
    end_time: str


@dataclass(frozen=True, slots=True)
class ClassroomScheduleEntry:
    """One published slot of a classroom, derived from a course schedule."""

    id: str
    classroom_id: str
    course_id: str
    course_name: str
    mentor_name: str
    day_of_week: int
    start_time: str
    end_time: str
    is_recurring: bool = True


@dataclass(frozen=True, slots=True)
class ConflictReport:
    """Courses whose slots overlap a candidate schedule, first occurrence order."""

    conflicting_courses: tuple[Course, ...]

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicting_courses)
