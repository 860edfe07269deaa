"""Enrollment ledger: keeps student and course enrollment sets in step."""

from __future__ import annotations

import logging

from fastapi import Depends

from academy.core.config import get_settings
from academy.core.metrics import ENROLLMENT_OPERATIONS_TOTAL
from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.repository import AuditRepository
from academy.modules.courses.models import Course
from academy.modules.courses.repository import CoursesRepository
from academy.modules.enrollment.schemas import BulkEnrollmentFailure, BulkEnrollmentRead
from academy.modules.students.models import Student
from academy.modules.students.repository import StudentsRepository
from academy.shared.exceptions import (
    AlreadyEnrolledException,
    AppException,
    BusinessRuleException,
    CourseFullException,
    NotFoundException,
)

settings = get_settings()
logger = logging.getLogger(__name__)


class EnrollmentService:
    """Enroll and unenroll students with capacity and duplicate checks.

    Every call validates before mutating and updates both sides inside one store
    transaction, so ``course.id in student.enrolled_courses`` holds exactly when
    ``student.id in course.enrolled_students``.
    """

    def __init__(
        self,
        students_repository: StudentsRepository,
        courses_repository: CoursesRepository,
        audit_repository: AuditRepository,
    ) -> None:
        self.students_repository = students_repository
        self.courses_repository = courses_repository
        self.audit_repository = audit_repository

    async def _resolve(self, student_id: str, course_id: str) -> tuple[Student, Course]:
        student = await self.students_repository.get_student_by_id(student_id)
        if student is None:
            raise NotFoundException("Student not found")
        course = await self.courses_repository.get_course_by_id(course_id)
        if course is None:
            raise NotFoundException("Course not found")
        return student, course

    async def enroll(self, student_id: str, course_id: str) -> Student:
        """Enroll student into course."""
        try:
            async with self.students_repository.transaction():
                student, course = await self._resolve(student_id, course_id)
                if course.id in student.enrolled_courses or student.id in course.enrolled_students:
                    raise AlreadyEnrolledException("Student already enrolled in this course")
                if course.is_full:
                    raise CourseFullException("Course is at maximum capacity")

                await self.students_repository.add_course(student, course.id)
                try:
                    await self.courses_repository.add_student(course, student.id)
                except Exception:
                    await self.students_repository.remove_course(student, course.id)
                    raise
                await self.audit_repository.create_audit_log(
                    actor_id=None,
                    action="enrollment.enroll",
                    entity_type="course",
                    entity_id=course.id,
                    payload={
                        "student_id": student.id,
                        "current_students": course.current_students,
                    },
                )
        except AppException as exc:
            ENROLLMENT_OPERATIONS_TOTAL.labels(operation="enroll", outcome=exc.code).inc()
            raise
        ENROLLMENT_OPERATIONS_TOTAL.labels(operation="enroll", outcome="success").inc()
        return student

    async def unenroll(self, student_id: str, course_id: str) -> Student:
        """Remove student from course; a student that is not enrolled is left as is."""
        try:
            async with self.students_repository.transaction():
                student, course = await self._resolve(student_id, course_id)
                await self.students_repository.remove_course(student, course.id)
                await self.courses_repository.remove_student(course, student.id)
                await self.audit_repository.create_audit_log(
                    actor_id=None,
                    action="enrollment.unenroll",
                    entity_type="course",
                    entity_id=course.id,
                    payload={
                        "student_id": student.id,
                        "current_students": course.current_students,
                    },
                )
        except AppException as exc:
            ENROLLMENT_OPERATIONS_TOTAL.labels(operation="unenroll", outcome=exc.code).inc()
            raise
        ENROLLMENT_OPERATIONS_TOTAL.labels(operation="unenroll", outcome="success").inc()
        return student

    async def bulk_enroll(self, student_ids: list[str], course_id: str) -> BulkEnrollmentRead:
        """Enroll each student in input order; failures never undo earlier successes."""
        if len(student_ids) > settings.bulk_operation_max_items:
            raise BusinessRuleException(
                f"Bulk operations accept at most {settings.bulk_operation_max_items} items",
            )

        result = BulkEnrollmentRead(course_id=course_id)
        for student_id in student_ids:
            try:
                await self.enroll(student_id, course_id)
            except AppException as exc:
                result.failed.append(
                    BulkEnrollmentFailure(student_id=student_id, reason=exc.code, message=exc.message),
                )
            except Exception:
                logger.exception(
                    "Unexpected error enrolling student %s into course %s",
                    student_id,
                    course_id,
                )
                result.failed.append(
                    BulkEnrollmentFailure(
                        student_id=student_id,
                        reason="unexpected_error",
                        message="Unexpected error",
                    ),
                )
            else:
                result.succeeded.append(student_id)

        logger.info(
            "Bulk enrollment into course %s: %d succeeded, %d failed",
            course_id,
            len(result.succeeded),
            len(result.failed),
        )
        return result


async def get_enrollment_service(store: InMemoryStore = Depends(get_store)) -> EnrollmentService:
    """Dependency provider for enrollment service."""
    return EnrollmentService(
        students_repository=StudentsRepository(store),
        courses_repository=CoursesRepository(store),
        audit_repository=AuditRepository(store),
    )
