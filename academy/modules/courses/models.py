"""Course domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from academy.core.enums import CourseLevelEnum, CourseStatusEnum
from academy.modules.scheduling.models import WeeklySlot
from academy.shared.utils import new_id, utc_now


@dataclass
class Course:
    """Course held in one classroom on a weekly schedule.

    ``mentor_id`` is empty while unassigned. ``current_students`` mirrors
    ``len(enrolled_students)`` and is only recomputed by the enrollment ledger.
    """

    name: str
    classroom_id: str
    max_students: int
    description: str = ""
    mentor_id: str = ""
    duration_weeks: int = 0
    price: Decimal = Decimal("0")
    level: CourseLevelEnum = CourseLevelEnum.BEGINNER
    category: str = ""
    status: CourseStatusEnum = CourseStatusEnum.ACTIVE
    schedule: list[WeeklySlot] = field(default_factory=list)
    enrolled_students: list[str] = field(default_factory=list)
    current_students: int = 0
    start_date: date | None = None
    end_date: date | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def recount(self) -> None:
        self.current_students = len(self.enrolled_students)

    @property
    def is_full(self) -> bool:
        return self.current_students >= self.max_students
