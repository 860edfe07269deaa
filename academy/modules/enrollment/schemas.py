"""Enrollment schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BulkEnrollmentRequest(BaseModel):
    """Enroll several students into one course."""

    student_ids: list[str] = Field(min_length=1)


class BulkEnrollmentFailure(BaseModel):
    """Per-student failure inside a bulk enrollment."""

    student_id: str
    reason: str
    message: str


class BulkEnrollmentRead(BaseModel):
    """Bulk enrollment outcome, in input order."""

    course_id: str
    succeeded: list[str] = Field(default_factory=list)
    failed: list[BulkEnrollmentFailure] = Field(default_factory=list)
