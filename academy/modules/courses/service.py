"""Courses business logic layer."""

from __future__ import annotations

from fastapi import Depends

from academy.core.config import get_settings
from academy.core.enums import CourseStatusEnum
from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.repository import AuditRepository
from academy.modules.classrooms.repository import ClassroomsRepository
from academy.modules.courses.models import Course
from academy.modules.courses.repository import CoursesRepository
from academy.modules.courses.schemas import CourseCreate, CourseUpdate
from academy.modules.mentors.repository import MentorsRepository
from academy.modules.students.repository import StudentsRepository
from academy.shared.exceptions import BusinessRuleException, NotFoundException

settings = get_settings()


class CoursesService:
    """Course catalogue with mentor reassignment and delete cascades."""

    def __init__(
        self,
        repository: CoursesRepository,
        classrooms_repository: ClassroomsRepository,
        mentors_repository: MentorsRepository,
        students_repository: StudentsRepository,
        audit_repository: AuditRepository,
    ) -> None:
        self.repository = repository
        self.classrooms_repository = classrooms_repository
        self.mentors_repository = mentors_repository
        self.students_repository = students_repository
        self.audit_repository = audit_repository

    async def _ensure_classroom(self, classroom_id: str) -> None:
        if await self.classrooms_repository.get_classroom_by_id(classroom_id) is None:
            raise NotFoundException("Classroom not found")

    async def create_course(self, payload: CourseCreate) -> Course:
        """Create course; a given mentor gets the course in its assigned set."""
        async with self.repository.transaction():
            await self._ensure_classroom(payload.classroom_id)
            mentor = None
            if payload.mentor_id:
                mentor = await self.mentors_repository.get_mentor_by_id(payload.mentor_id)
                if mentor is None:
                    raise NotFoundException("Mentor not found")

            values = payload.model_dump(exclude={"schedule"})
            course = await self.repository.add_course(
                Course(**values, schedule=[slot.to_model() for slot in payload.schedule]),
            )
            if mentor is not None:
                await self.mentors_repository.add_course(mentor, course.id)

            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="courses.course.create",
                entity_type="course",
                entity_id=course.id,
                payload={
                    "classroom_id": course.classroom_id,
                    "mentor_id": course.mentor_id or None,
                    "max_students": course.max_students,
                },
            )
        return course

    async def get_course(self, course_id: str) -> Course:
        course = await self.repository.get_course_by_id(course_id)
        if course is None:
            raise NotFoundException("Course not found")
        return course

    async def list_courses(
        self,
        limit: int,
        offset: int,
        *,
        mentor_id: str | None = None,
        student_id: str | None = None,
        classroom_id: str | None = None,
        status: CourseStatusEnum | None = None,
        query: str | None = None,
    ) -> tuple[list[Course], int]:
        """List courses with optional relationship filters and free-text query."""
        return await self.repository.list_courses(
            limit=limit,
            offset=offset,
            mentor_id=mentor_id,
            student_id=student_id,
            classroom_id=classroom_id,
            status=status,
            query=query,
        )

    async def update_course(self, course_id: str, payload: CourseUpdate) -> Course:
        """Apply partial update, moving the course between mentors when it changes.

        Reassignment keeps the course status as is, unlike an explicit unassign.
        """
        async with self.repository.transaction():
            course = await self.get_course(course_id)
            changes = payload.model_dump(exclude_none=True)

            if "classroom_id" in changes:
                await self._ensure_classroom(changes["classroom_id"])
            if "max_students" in changes and changes["max_students"] < course.current_students:
                raise BusinessRuleException(
                    "max_students cannot be lower than the current enrollment",
                )
            start_date = changes.get("start_date", course.start_date)
            end_date = changes.get("end_date", course.end_date)
            if start_date and end_date and end_date < start_date:
                raise BusinessRuleException("end_date must not be before start_date")
            if payload.schedule is not None:
                changes["schedule"] = [slot.to_model() for slot in payload.schedule]

            old_mentor_id = course.mentor_id
            new_mentor_id = changes.get("mentor_id", old_mentor_id)
            new_mentor = None
            if new_mentor_id != old_mentor_id and new_mentor_id:
                new_mentor = await self.mentors_repository.get_mentor_by_id(new_mentor_id)
                if new_mentor is None:
                    raise NotFoundException("Mentor not found")

            course = await self.repository.update_course(course, **changes)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="courses.course.update",
                entity_type="course",
                entity_id=course.id,
                payload={"fields": sorted(changes)},
            )

            if new_mentor_id != old_mentor_id:
                if old_mentor_id:
                    old_mentor = await self.mentors_repository.get_mentor_by_id(old_mentor_id)
                    if old_mentor is not None:
                        await self.mentors_repository.remove_course(old_mentor, course.id)
                if new_mentor is not None:
                    await self.mentors_repository.add_course(new_mentor, course.id)
                await self.audit_repository.create_audit_log(
                    actor_id=None,
                    action="courses.course.reassign",
                    entity_type="course",
                    entity_id=course.id,
                    payload={
                        "from_mentor_id": old_mentor_id or None,
                        "to_mentor_id": new_mentor_id or None,
                    },
                )
        return course

    async def delete_course(self, course_id: str) -> None:
        """Delete course after detaching it from its mentor and enrolled students."""
        async with self.repository.transaction():
            course = await self.get_course(course_id)

            if course.mentor_id:
                mentor = await self.mentors_repository.get_mentor_by_id(course.mentor_id)
                if mentor is not None:
                    await self.mentors_repository.remove_course(mentor, course.id)

            for student_id in list(course.enrolled_students):
                student = await self.students_repository.get_student_by_id(student_id)
                if student is not None:
                    await self.students_repository.remove_course(student, course.id)

            await self.repository.delete_course(course)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="courses.course.delete",
                entity_type="course",
                entity_id=course.id,
                payload={"released_students": list(course.enrolled_students)},
            )

    async def bulk_update_status(
        self,
        course_ids: list[str],
        status: CourseStatusEnum,
    ) -> tuple[int, int]:
        """Set status on each course in order; unknown ids are counted as failed."""
        if len(course_ids) > settings.bulk_operation_max_items:
            raise BusinessRuleException(
                f"Bulk operations accept at most {settings.bulk_operation_max_items} items",
            )

        updated = 0
        failed = 0
        for course_id in course_ids:
            async with self.repository.transaction():
                course = await self.repository.get_course_by_id(course_id)
                if course is None:
                    failed += 1
                    continue
                await self.repository.update_course(course, status=status)
                await self.audit_repository.create_audit_log(
                    actor_id=None,
                    action="courses.course.status",
                    entity_type="course",
                    entity_id=course.id,
                    payload={"status": status.value},
                )
                updated += 1
        return updated, failed


async def get_courses_service(store: InMemoryStore = Depends(get_store)) -> CoursesService:
    """Dependency provider for courses service."""
    return CoursesService(
        repository=CoursesRepository(store),
        classrooms_repository=ClassroomsRepository(store),
        mentors_repository=MentorsRepository(store),
        students_repository=StudentsRepository(store),
        audit_repository=AuditRepository(store),
    )
