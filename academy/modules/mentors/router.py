"""Mentors API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from academy.modules.mentors.schemas import MentorCreate, MentorRead, MentorUpdate
from academy.modules.mentors.service import MentorsService, get_mentors_service
from academy.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/mentors", tags=["mentors"])


@router.post("", response_model=MentorRead, status_code=status.HTTP_201_CREATED)
async def create_mentor(
    payload: MentorCreate,
    service: MentorsService = Depends(get_mentors_service),
) -> MentorRead:
    """Create mentor profile."""
    mentor = await service.create_mentor(payload)
    return MentorRead.model_validate(mentor)


@router.get("", response_model=Page[MentorRead])
async def list_mentors(
    q: str | None = Query(default=None),
    pagination=Depends(get_pagination_params),
    service: MentorsService = Depends(get_mentors_service),
) -> Page[MentorRead]:
    """List mentor profiles."""
    items, total = await service.list_mentors(pagination.limit, pagination.offset, query=q)
    serialized = [MentorRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/by-user/{user_id}", response_model=MentorRead)
async def get_mentor_by_user(
    user_id: str,
    service: MentorsService = Depends(get_mentors_service),
) -> MentorRead:
    mentor = await service.get_mentor_by_user(user_id)
    return MentorRead.model_validate(mentor)


@router.get("/{mentor_id}", response_model=MentorRead)
async def get_mentor(
    mentor_id: str,
    service: MentorsService = Depends(get_mentors_service),
) -> MentorRead:
    mentor = await service.get_mentor(mentor_id)
    return MentorRead.model_validate(mentor)


@router.patch("/{mentor_id}", response_model=MentorRead)
async def update_mentor(
    mentor_id: str,
    payload: MentorUpdate,
    service: MentorsService = Depends(get_mentors_service),
) -> MentorRead:
    """Update mentor profile."""
    mentor = await service.update_mentor(mentor_id, payload)
    return MentorRead.model_validate(mentor)


@router.delete("/{mentor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mentor(
    mentor_id: str,
    service: MentorsService = Depends(get_mentors_service),
) -> Response:
    """Delete mentor and release its courses."""
    await service.delete_mentor(mentor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{mentor_id}/courses/{course_id}", response_model=MentorRead)
async def assign_course(
    mentor_id: str,
    course_id: str,
    service: MentorsService = Depends(get_mentors_service),
) -> MentorRead:
    """Assign course to mentor."""
    mentor = await service.assign_course(mentor_id, course_id)
    return MentorRead.model_validate(mentor)


@router.delete("/{mentor_id}/courses/{course_id}", response_model=MentorRead)
async def unassign_course(
    mentor_id: str,
    course_id: str,
    service: MentorsService = Depends(get_mentors_service),
) -> MentorRead:
    """Unassign course from mentor."""
    mentor = await service.unassign_course(mentor_id, course_id)
    return MentorRead.model_validate(mentor)
