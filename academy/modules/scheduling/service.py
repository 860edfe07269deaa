"""Scheduling business logic layer."""

from __future__ import annotations

from collections.abc import Iterable

from fastapi import Depends

from academy.core.metrics import SCHEDULE_CONFLICT_CHECKS_TOTAL
from academy.core.store import InMemoryStore, get_store
from academy.modules.courses.models import Course
from academy.modules.courses.repository import CoursesRepository
from academy.modules.mentors.repository import MentorsRepository
from academy.modules.scheduling.intervals import overlaps, to_minutes
from academy.modules.scheduling.models import (
    ClassroomScheduleEntry,
    ConflictReport,
    WeeklySlot,
)


class SchedulingService:
    """Read-only queries over the weekly classroom timetable.

    Nothing here mutates state or enforces itself: callers run a conflict check
    before creating or rescheduling a course when they want one.
    """

    def __init__(
        self,
        courses_repository: CoursesRepository,
        mentors_repository: MentorsRepository,
    ) -> None:
        self.courses_repository = courses_repository
        self.mentors_repository = mentors_repository

    async def find_conflicts(
        self,
        classroom_id: str,
        candidate_slots: Iterable[WeeklySlot],
        exclude_course_id: str | None = None,
    ) -> ConflictReport:
        """Find courses in the classroom whose slots overlap any candidate slot."""
        courses = [
            course
            for course in await self.courses_repository.list_courses_in_classroom(classroom_id)
            if exclude_course_id is None or course.id != exclude_course_id
        ]

        conflicting: dict[str, Course] = {}
        for candidate in candidate_slots:
            for course in courses:
                if course.id in conflicting:
                    continue
                if any(overlaps(candidate, slot) for slot in course.schedule):
                    conflicting[course.id] = course

        report = ConflictReport(conflicting_courses=tuple(conflicting.values()))
        SCHEDULE_CONFLICT_CHECKS_TOTAL.labels(
            result="conflict" if report.has_conflict else "clear",
        ).inc()
        return report

    async def get_classroom_schedule(self, classroom_id: str) -> list[ClassroomScheduleEntry]:
        """Build the weekly timetable of a classroom from the courses held there."""
        entries: list[ClassroomScheduleEntry] = []
        for course in await self.courses_repository.list_courses_in_classroom(classroom_id):
            mentor_name = ""
            if course.mentor_id:
                mentor = await self.mentors_repository.get_mentor_by_id(course.mentor_id)
                if mentor is not None:
                    mentor_name = mentor.display_name
            for index, slot in enumerate(course.schedule):
                entries.append(
                    ClassroomScheduleEntry(
                        id=f"{course.id}-{index}",
                        classroom_id=classroom_id,
                        course_id=course.id,
                        course_name=course.name,
                        mentor_name=mentor_name,
                        day_of_week=slot.day_of_week,
                        start_time=slot.start_time,
                        end_time=slot.end_time,
                    ),
                )
        entries.sort(key=lambda entry: (entry.day_of_week, to_minutes(entry.start_time)))
        return entries

    async def is_classroom_available(
        self,
        classroom_id: str,
        day_of_week: int,
        start_time: str,
        end_time: str,
    ) -> bool:
        """Return True if no published slot of the classroom overlaps the window."""
        requested = WeeklySlot(day_of_week=day_of_week, start_time=start_time, end_time=end_time)
        schedule = await self.get_classroom_schedule(classroom_id)
        return not any(overlaps(requested, entry) for entry in schedule)


async def get_scheduling_service(store: InMemoryStore = Depends(get_store)) -> SchedulingService:
    """Dependency provider for scheduling service."""
    return SchedulingService(
        courses_repository=CoursesRepository(store),
        mentors_repository=MentorsRepository(store),
    )
