"""Classrooms API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from academy.modules.classrooms.schemas import ClassroomCreate, ClassroomRead, ClassroomUpdate
from academy.modules.classrooms.service import ClassroomsService, get_classrooms_service
from academy.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/classrooms", tags=["classrooms"])


@router.post("", response_model=ClassroomRead, status_code=status.HTTP_201_CREATED)
async def create_classroom(
    payload: ClassroomCreate,
    service: ClassroomsService = Depends(get_classrooms_service),
) -> ClassroomRead:
    """Create classroom."""
    classroom = await service.create_classroom(payload)
    return ClassroomRead.model_validate(classroom)


@router.get("", response_model=Page[ClassroomRead])
async def list_classrooms(
    active_only: bool = Query(default=False),
    pagination=Depends(get_pagination_params),
    service: ClassroomsService = Depends(get_classrooms_service),
) -> Page[ClassroomRead]:
    """List classrooms ordered by name."""
    items, total = await service.list_classrooms(
        pagination.limit,
        pagination.offset,
        active_only=active_only,
    )
    serialized = [ClassroomRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/{classroom_id}", response_model=ClassroomRead)
async def get_classroom(
    classroom_id: str,
    service: ClassroomsService = Depends(get_classrooms_service),
) -> ClassroomRead:
    classroom = await service.get_classroom(classroom_id)
    return ClassroomRead.model_validate(classroom)


@router.patch("/{classroom_id}", response_model=ClassroomRead)
async def update_classroom(
    classroom_id: str,
    payload: ClassroomUpdate,
    service: ClassroomsService = Depends(get_classrooms_service),
) -> ClassroomRead:
    """Update classroom."""
    classroom = await service.update_classroom(classroom_id, payload)
    return ClassroomRead.model_validate(classroom)


@router.delete("/{classroom_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_classroom(
    classroom_id: str,
    service: ClassroomsService = Depends(get_classrooms_service),
) -> Response:
    """Delete classroom that is not referenced by any course."""
    await service.delete_classroom(classroom_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
