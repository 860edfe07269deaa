"""Enrollment API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from academy.modules.enrollment.schemas import BulkEnrollmentRead, BulkEnrollmentRequest
from academy.modules.enrollment.service import EnrollmentService, get_enrollment_service
from academy.modules.students.schemas import StudentRead

router = APIRouter(prefix="/enrollment", tags=["enrollment"])


@router.post("/students/{student_id}/courses/{course_id}", response_model=StudentRead)
async def enroll_student(
    student_id: str,
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> StudentRead:
    """Enroll student into course."""
    student = await service.enroll(student_id, course_id)
    return StudentRead.model_validate(student)


@router.delete("/students/{student_id}/courses/{course_id}", response_model=StudentRead)
async def unenroll_student(
    student_id: str,
    course_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> StudentRead:
    """Remove student from course."""
    student = await service.unenroll(student_id, course_id)
    return StudentRead.model_validate(student)


@router.post("/courses/{course_id}/bulk", response_model=BulkEnrollmentRead)
async def bulk_enroll(
    course_id: str,
    payload: BulkEnrollmentRequest,
    service: EnrollmentService = Depends(get_enrollment_service),
) -> BulkEnrollmentRead:
    """Enroll several students, reporting per-student failures."""
    return await service.bulk_enroll(payload.student_ids, course_id)
