"""Students API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from academy.modules.students.schemas import StudentCreate, StudentRead, StudentUpdate
from academy.modules.students.service import StudentsService, get_students_service
from academy.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/students", tags=["students"])


@router.post("", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
async def create_student(
    payload: StudentCreate,
    service: StudentsService = Depends(get_students_service),
) -> StudentRead:
    """Create student."""
    student = await service.create_student(payload)
    return StudentRead.model_validate(student)


@router.get("", response_model=Page[StudentRead])
async def list_students(
    parent_id: str | None = Query(default=None),
    q: str | None = Query(default=None),
    pagination=Depends(get_pagination_params),
    service: StudentsService = Depends(get_students_service),
) -> Page[StudentRead]:
    """List students, optionally by parent or search term."""
    items, total = await service.list_students(
        pagination.limit,
        pagination.offset,
        parent_id=parent_id,
        query=q,
    )
    serialized = [StudentRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/{student_id}", response_model=StudentRead)
async def get_student(
    student_id: str,
    service: StudentsService = Depends(get_students_service),
) -> StudentRead:
    student = await service.get_student(student_id)
    return StudentRead.model_validate(student)


@router.patch("/{student_id}", response_model=StudentRead)
async def update_student(
    student_id: str,
    payload: StudentUpdate,
    service: StudentsService = Depends(get_students_service),
) -> StudentRead:
    """Update student."""
    student = await service.update_student(student_id, payload)
    return StudentRead.model_validate(student)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    service: StudentsService = Depends(get_students_service),
) -> Response:
    """Delete student and release its course seats."""
    await service.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
