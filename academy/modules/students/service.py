"""Students business logic layer."""

from __future__ import annotations

from fastapi import Depends

from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.repository import AuditRepository
from academy.modules.courses.repository import CoursesRepository
from academy.modules.students.models import EmergencyContact, Student
from academy.modules.students.repository import StudentsRepository
from academy.modules.students.schemas import (
    EmergencyContactSchema,
    StudentCreate,
    StudentUpdate,
)
from academy.shared.exceptions import NotFoundException


def _to_contact(schema: EmergencyContactSchema | None) -> EmergencyContact | None:
    if schema is None:
        return None
    return EmergencyContact(**schema.model_dump())


class StudentsService:
    """Students domain service."""

    def __init__(
        self,
        repository: StudentsRepository,
        courses_repository: CoursesRepository,
        audit_repository: AuditRepository,
    ) -> None:
        self.repository = repository
        self.courses_repository = courses_repository
        self.audit_repository = audit_repository

    async def create_student(self, payload: StudentCreate) -> Student:
        """Create student with no enrollments."""
        values = payload.model_dump(exclude={"emergency_contact"})
        async with self.repository.transaction():
            student = await self.repository.add_student(
                Student(**values, emergency_contact=_to_contact(payload.emergency_contact)),
            )
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="students.student.create",
                entity_type="student",
                entity_id=student.id,
                payload={"parent_id": student.parent_id},
            )
        return student

    async def get_student(self, student_id: str) -> Student:
        student = await self.repository.get_student_by_id(student_id)
        if student is None:
            raise NotFoundException("Student not found")
        return student

    async def list_students(
        self,
        limit: int,
        offset: int,
        *,
        parent_id: str | None = None,
        query: str | None = None,
    ) -> tuple[list[Student], int]:
        return await self.repository.list_students(
            limit=limit,
            offset=offset,
            parent_id=parent_id,
            query=query,
        )

    async def update_student(self, student_id: str, payload: StudentUpdate) -> Student:
        """Apply partial update; enrollments change only through the enrollment ledger."""
        async with self.repository.transaction():
            student = await self.get_student(student_id)
            changes = payload.model_dump(exclude_none=True)
            if payload.emergency_contact is not None:
                changes["emergency_contact"] = _to_contact(payload.emergency_contact)
            student = await self.repository.update_student(student, **changes)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="students.student.update",
                entity_type="student",
                entity_id=student.id,
                payload={"fields": sorted(changes)},
            )
        return student

    async def delete_student(self, student_id: str) -> None:
        """Delete student after removing it from every enrolled course."""
        async with self.repository.transaction():
            student = await self.get_student(student_id)
            for course_id in list(student.enrolled_courses):
                course = await self.courses_repository.get_course_by_id(course_id)
                if course is not None:
                    await self.courses_repository.remove_student(course, student.id)

            await self.repository.delete_student(student)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="students.student.delete",
                entity_type="student",
                entity_id=student.id,
                payload={"released_courses": list(student.enrolled_courses)},
            )


async def get_students_service(store: InMemoryStore = Depends(get_store)) -> StudentsService:
    """Dependency provider for students service."""
    return StudentsService(
        repository=StudentsRepository(store),
        courses_repository=CoursesRepository(store),
        audit_repository=AuditRepository(store),
    )
