"""Mentors business logic layer."""

from __future__ import annotations

import logging

from fastapi import Depends

from academy.core.enums import CourseStatusEnum
from academy.core.metrics import MENTOR_ASSIGNMENT_OPERATIONS_TOTAL
from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.repository import AuditRepository
from academy.modules.courses.repository import CoursesRepository
from academy.modules.mentors.models import Mentor
from academy.modules.mentors.repository import MentorsRepository
from academy.modules.mentors.schemas import MentorCreate, MentorUpdate
from academy.shared.exceptions import (
    AlreadyAssignedException,
    ConflictException,
    NotFoundException,
)

logger = logging.getLogger(__name__)


class MentorsService:
    """Mentor profiles and the mentor-course assignment ledger."""

    def __init__(
        self,
        repository: MentorsRepository,
        courses_repository: CoursesRepository,
        audit_repository: AuditRepository,
    ) -> None:
        self.repository = repository
        self.courses_repository = courses_repository
        self.audit_repository = audit_repository

    async def _get_mentor_or_raise(self, mentor_id: str) -> Mentor:
        mentor = await self.repository.get_mentor_by_id(mentor_id)
        if mentor is None:
            raise NotFoundException("Mentor not found")
        return mentor

    async def create_mentor(self, payload: MentorCreate) -> Mentor:
        """Create mentor profile, one per user."""
        async with self.repository.transaction():
            existing = await self.repository.get_mentor_by_user_id(payload.user_id)
            if existing is not None:
                raise ConflictException("User already has a mentor profile")

            mentor = await self.repository.add_mentor(
                Mentor(
                    user_id=payload.user_id,
                    display_name=payload.display_name,
                    bio=payload.bio,
                    experience_years=payload.experience_years,
                    hourly_rate=payload.hourly_rate,
                    specialization=list(payload.specialization),
                    qualifications=list(payload.qualifications),
                    available_hours=[slot.to_model() for slot in payload.available_hours],
                    is_active=payload.is_active,
                ),
            )
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="mentors.mentor.create",
                entity_type="mentor",
                entity_id=mentor.id,
                payload={"user_id": mentor.user_id},
            )
        return mentor

    async def get_mentor(self, mentor_id: str) -> Mentor:
        return await self._get_mentor_or_raise(mentor_id)

    async def get_mentor_by_user(self, user_id: str) -> Mentor:
        mentor = await self.repository.get_mentor_by_user_id(user_id)
        if mentor is None:
            raise NotFoundException("Mentor profile not found for user")
        return mentor

    async def list_mentors(
        self,
        limit: int,
        offset: int,
        query: str | None = None,
    ) -> tuple[list[Mentor], int]:
        """List mentor profiles, optionally filtered by free-text query."""
        return await self.repository.list_mentors(limit=limit, offset=offset, query=query)

    async def update_mentor(self, mentor_id: str, payload: MentorUpdate) -> Mentor:
        """Apply partial profile update."""
        async with self.repository.transaction():
            mentor = await self._get_mentor_or_raise(mentor_id)
            changes = payload.model_dump(exclude_none=True)
            if payload.available_hours is not None:
                changes["available_hours"] = [slot.to_model() for slot in payload.available_hours]
            mentor = await self.repository.update_mentor(mentor, **changes)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="mentors.mentor.update",
                entity_type="mentor",
                entity_id=mentor.id,
                payload={"fields": sorted(changes)},
            )
        return mentor

    async def delete_mentor(self, mentor_id: str) -> None:
        """Delete mentor, leaving each of its courses unassigned and inactive."""
        async with self.repository.transaction():
            mentor = await self._get_mentor_or_raise(mentor_id)
            released: list[str] = []
            for course_id in list(mentor.assigned_courses):
                course = await self.courses_repository.get_course_by_id(course_id)
                if course is None:
                    continue
                await self.courses_repository.set_mentor(course, "", CourseStatusEnum.INACTIVE)
                released.append(course.id)

            await self.repository.delete_mentor(mentor)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="mentors.mentor.delete",
                entity_type="mentor",
                entity_id=mentor.id,
                payload={"released_courses": released},
            )
        logger.info("Deleted mentor %s, released %d course(s)", mentor.id, len(released))

    async def assign_course(self, mentor_id: str, course_id: str) -> Mentor:
        """Assign course to mentor.

        No check is made against the mentor's other courses or ``available_hours``;
        double-booking a mentor is left to the caller.
        """
        async with self.repository.transaction():
            mentor = await self._get_mentor_or_raise(mentor_id)
            course = await self.courses_repository.get_course_by_id(course_id)
            if course is None:
                raise NotFoundException("Course not found")
            if course.id in mentor.assigned_courses:
                raise AlreadyAssignedException("Course already assigned to this mentor")

            previous_mentor_id = course.mentor_id
            if previous_mentor_id and previous_mentor_id != mentor.id:
                previous_mentor = await self.repository.get_mentor_by_id(previous_mentor_id)
                if previous_mentor is not None:
                    await self.repository.remove_course(previous_mentor, course.id)

            await self.repository.add_course(mentor, course.id)
            await self.courses_repository.set_mentor(course, mentor.id)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="mentors.course.assign",
                entity_type="course",
                entity_id=course.id,
                payload={
                    "mentor_id": mentor.id,
                    "previous_mentor_id": previous_mentor_id or None,
                },
            )
        MENTOR_ASSIGNMENT_OPERATIONS_TOTAL.labels(operation="assign").inc()
        return mentor

    async def unassign_course(self, mentor_id: str, course_id: str) -> Mentor:
        """Remove course from mentor; the course becomes unassigned and inactive."""
        async with self.repository.transaction():
            mentor = await self._get_mentor_or_raise(mentor_id)
            course = await self.courses_repository.get_course_by_id(course_id)
            if course is None:
                raise NotFoundException("Course not found")

            await self.repository.remove_course(mentor, course.id)
            if course.mentor_id == mentor.id:
                await self.courses_repository.set_mentor(course, "", CourseStatusEnum.INACTIVE)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="mentors.course.unassign",
                entity_type="course",
                entity_id=course.id,
                payload={"mentor_id": mentor.id},
            )
        MENTOR_ASSIGNMENT_OPERATIONS_TOTAL.labels(operation="unassign").inc()
        return mentor


async def get_mentors_service(store: InMemoryStore = Depends(get_store)) -> MentorsService:
    """Dependency provider for mentors service."""
    return MentorsService(
        repository=MentorsRepository(store),
        courses_repository=CoursesRepository(store),
        audit_repository=AuditRepository(store),
    )
