"""Scheduling API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from academy.modules.scheduling.schemas import (
    AvailabilityCheckRequest,
    AvailabilityRead,
    ClassroomScheduleEntryRead,
    ConflictCheckRead,
    ConflictCheckRequest,
    ConflictingCourseRead,
)
from academy.modules.scheduling.service import SchedulingService, get_scheduling_service

router = APIRouter(prefix="/scheduling", tags=["scheduling"])


@router.post("/conflicts", response_model=ConflictCheckRead)
async def check_schedule_conflicts(
    payload: ConflictCheckRequest,
    service: SchedulingService = Depends(get_scheduling_service),
) -> ConflictCheckRead:
    """Check a candidate schedule against courses already in the classroom."""
    report = await service.find_conflicts(
        payload.classroom_id,
        [slot.to_model() for slot in payload.schedule],
        exclude_course_id=payload.exclude_course_id,
    )
    return ConflictCheckRead(
        has_conflict=report.has_conflict,
        conflicting_courses=[
            ConflictingCourseRead.model_validate(course) for course in report.conflicting_courses
        ],
    )


@router.get("/classrooms/{classroom_id}/schedule", response_model=list[ClassroomScheduleEntryRead])
async def get_classroom_schedule(
    classroom_id: str,
    service: SchedulingService = Depends(get_scheduling_service),
) -> list[ClassroomScheduleEntryRead]:
    """Weekly timetable of a classroom."""
    entries = await service.get_classroom_schedule(classroom_id)
    return [ClassroomScheduleEntryRead.model_validate(entry) for entry in entries]


@router.post("/availability", response_model=AvailabilityRead)
async def check_classroom_availability(
    payload: AvailabilityCheckRequest,
    service: SchedulingService = Depends(get_scheduling_service),
) -> AvailabilityRead:
    """Check whether a classroom is free for a weekly window."""
    available = await service.is_classroom_available(
        payload.classroom_id,
        payload.day_of_week,
        payload.start_time,
        payload.end_time,
    )
    return AvailabilityRead(
        classroom_id=payload.classroom_id,
        day_of_week=payload.day_of_week,
        start_time=payload.start_time,
        end_time=payload.end_time,
        available=available,
    )
