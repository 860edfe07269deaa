from __future__ import annotations

import pytest

from academy.core.store import InMemoryStore
from academy.modules.audit.repository import AuditRepository
from academy.modules.courses.repository import CoursesRepository
from academy.modules.students.repository import StudentsRepository
from academy.modules.students.schemas import StudentCreate, StudentUpdate
from academy.modules.students.service import StudentsService


def _make_service(store: InMemoryStore) -> StudentsService:
    return StudentsService(
        repository=StudentsRepository(store),
        courses_repository=CoursesRepository(store),
        audit_repository=AuditRepository(store),
    )


async def _create(service: StudentsService, parent_id: str, first_name: str, **fields):
    return await service.create_student(
        StudentCreate(parent_id=parent_id, first_name=first_name, last_name="Johnson", **fields),
    )


@pytest.mark.asyncio
async def test_list_students_filters_by_parent_and_query() -> None:
    service = _make_service(InMemoryStore())
    alice = await _create(service, "parent-1", "Alice", email="alice@example.com")
    bob = await _create(service, "parent-1", "Bob", academic_level="Grade 8")
    emma = await _create(service, "parent-2", "Emma")

    items, total = await service.list_students(10, 0, parent_id="parent-1")
    assert total == 2
    assert {item.id for item in items} == {alice.id, bob.id}

    items, _ = await service.list_students(10, 0, query="ALICE@")
    assert items == [alice]

    items, _ = await service.list_students(10, 0, query="grade 8")
    assert items == [bob]

    items, _ = await service.list_students(10, 0, parent_id="parent-2", query="johnson")
    assert items == [emma]


@pytest.mark.asyncio
async def test_update_student_is_audited() -> None:
    store = InMemoryStore()
    service = _make_service(store)
    student = await _create(service, "parent-1", "Alice")

    await service.update_student(student.id, StudentUpdate(academic_level="Grade 11"))

    assert student.academic_level == "Grade 11"
    assert store.audit_logs[-1].action == "students.student.update"
    assert store.audit_logs[-1].payload == {"fields": ["academic_level"]}
