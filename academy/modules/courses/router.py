"""Courses API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from academy.core.enums import CourseStatusEnum
from academy.modules.courses.schemas import (
    BulkCourseStatusRead,
    BulkCourseStatusUpdate,
    CourseCreate,
    CourseRead,
    CourseUpdate,
)
from academy.modules.courses.service import CoursesService, get_courses_service
from academy.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
async def create_course(
    payload: CourseCreate,
    service: CoursesService = Depends(get_courses_service),
) -> CourseRead:
    """Create course."""
    course = await service.create_course(payload)
    return CourseRead.model_validate(course)


@router.get("", response_model=Page[CourseRead])
async def list_courses(
    mentor_id: str | None = Query(default=None),
    student_id: str | None = Query(default=None),
    classroom_id: str | None = Query(default=None),
    course_status: CourseStatusEnum | None = Query(default=None, alias="status"),
    q: str | None = Query(default=None),
    pagination=Depends(get_pagination_params),
    service: CoursesService = Depends(get_courses_service),
) -> Page[CourseRead]:
    """List courses."""
    items, total = await service.list_courses(
        pagination.limit,
        pagination.offset,
        mentor_id=mentor_id,
        student_id=student_id,
        classroom_id=classroom_id,
        status=course_status,
        query=q,
    )
    serialized = [CourseRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.post("/status", response_model=BulkCourseStatusRead)
async def bulk_update_status(
    payload: BulkCourseStatusUpdate,
    service: CoursesService = Depends(get_courses_service),
) -> BulkCourseStatusRead:
    """Set the same status on several courses."""
    updated, failed = await service.bulk_update_status(payload.course_ids, payload.status)
    return BulkCourseStatusRead(updated=updated, failed=failed)


@router.get("/{course_id}", response_model=CourseRead)
async def get_course(
    course_id: str,
    service: CoursesService = Depends(get_courses_service),
) -> CourseRead:
    course = await service.get_course(course_id)
    return CourseRead.model_validate(course)


@router.patch("/{course_id}", response_model=CourseRead)
async def update_course(
    course_id: str,
    payload: CourseUpdate,
    service: CoursesService = Depends(get_courses_service),
) -> CourseRead:
    """Update course."""
    course = await service.update_course(course_id, payload)
    return CourseRead.model_validate(course)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: str,
    service: CoursesService = Depends(get_courses_service),
) -> Response:
    """Delete course and detach it from mentor and students."""
    await service.delete_course(course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
