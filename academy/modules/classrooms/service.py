"""Classrooms business logic layer."""

from __future__ import annotations

from fastapi import Depends

from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.repository import AuditRepository
from academy.modules.classrooms.models import Classroom
from academy.modules.classrooms.repository import ClassroomsRepository
from academy.modules.classrooms.schemas import ClassroomCreate, ClassroomUpdate
from academy.modules.courses.repository import CoursesRepository
from academy.shared.exceptions import InvalidReferenceException, NotFoundException


class ClassroomsService:
    """Classrooms domain service."""

    def __init__(
        self,
        repository: ClassroomsRepository,
        courses_repository: CoursesRepository,
        audit_repository: AuditRepository,
    ) -> None:
        self.repository = repository
        self.courses_repository = courses_repository
        self.audit_repository = audit_repository

    async def create_classroom(self, payload: ClassroomCreate) -> Classroom:
        async with self.repository.transaction():
            classroom = await self.repository.add_classroom(Classroom(**payload.model_dump()))
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="classrooms.classroom.create",
                entity_type="classroom",
                entity_id=classroom.id,
                payload={"name": classroom.name, "capacity": classroom.capacity},
            )
        return classroom

    async def get_classroom(self, classroom_id: str) -> Classroom:
        classroom = await self.repository.get_classroom_by_id(classroom_id)
        if classroom is None:
            raise NotFoundException("Classroom not found")
        return classroom

    async def list_classrooms(
        self,
        limit: int,
        offset: int,
        active_only: bool = False,
    ) -> tuple[list[Classroom], int]:
        return await self.repository.list_classrooms(
            limit=limit,
            offset=offset,
            active_only=active_only,
        )

    async def update_classroom(self, classroom_id: str, payload: ClassroomUpdate) -> Classroom:
        async with self.repository.transaction():
            classroom = await self.get_classroom(classroom_id)
            changes = payload.model_dump(exclude_none=True)
            classroom = await self.repository.update_classroom(classroom, **changes)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="classrooms.classroom.update",
                entity_type="classroom",
                entity_id=classroom.id,
                payload={"fields": sorted(changes)},
            )
        return classroom

    async def delete_classroom(self, classroom_id: str) -> None:
        """Delete classroom that no course references."""
        async with self.repository.transaction():
            classroom = await self.get_classroom(classroom_id)
            courses = await self.courses_repository.list_courses_in_classroom(classroom.id)
            if courses:
                raise InvalidReferenceException(
                    "Cannot delete classroom that is assigned to courses",
                )
            await self.repository.delete_classroom(classroom)
            await self.audit_repository.create_audit_log(
                actor_id=None,
                action="classrooms.classroom.delete",
                entity_type="classroom",
                entity_id=classroom.id,
                payload={},
            )


async def get_classrooms_service(
    store: InMemoryStore = Depends(get_store),
) -> ClassroomsService:
    """Dependency provider for classrooms service."""
    return ClassroomsService(
        repository=ClassroomsRepository(store),
        courses_repository=CoursesRepository(store),
        audit_repository=AuditRepository(store),
    )
