"""Classrooms repository layer."""

from __future__ import annotations

from academy.core.store import StoreRepository
from academy.modules.classrooms.models import Classroom
from academy.shared.pagination import paginate
from academy.shared.utils import utc_now


class ClassroomsRepository(StoreRepository):
    """Store operations for classrooms."""

    async def add_classroom(self, classroom: Classroom) -> Classroom:
        self.store.classrooms[classroom.id] = classroom
        return classroom

    async def get_classroom_by_id(self, classroom_id: str) -> Classroom | None:
        return self.store.classrooms.get(classroom_id)

    async def list_classrooms(
        self,
        limit: int,
        offset: int,
        *,
        active_only: bool = False,
    ) -> tuple[list[Classroom], int]:
        items = [
            item for item in self.store.classrooms.values() if item.is_active or not active_only
        ]
        items.sort(key=lambda item: item.name.lower())
        return paginate(items, limit, offset)

    async def update_classroom(self, classroom: Classroom, **changes) -> Classroom:
        for key, value in changes.items():
            setattr(classroom, key, value)
        classroom.updated_at = utc_now()
        return classroom

    async def delete_classroom(self, classroom: Classroom) -> None:
        self.store.classrooms.pop(classroom.id, None)
