"""Mentors repository layer."""

from __future__ import annotations

from academy.core.store import StoreRepository
from academy.modules.mentors.models import Mentor
from academy.shared.pagination import paginate
from academy.shared.utils import utc_now


class MentorsRepository(StoreRepository):
    """Store operations for mentors."""

    async def add_mentor(self, mentor: Mentor) -> Mentor:
        self.store.mentors[mentor.id] = mentor
        return mentor

    async def get_mentor_by_id(self, mentor_id: str) -> Mentor | None:
        return self.store.mentors.get(mentor_id)

    async def get_mentor_by_user_id(self, user_id: str) -> Mentor | None:
        return next(
            (mentor for mentor in self.store.mentors.values() if mentor.user_id == user_id),
            None,
        )

    async def list_mentors(
        self,
        limit: int,
        offset: int,
        *,
        query: str | None = None,
    ) -> tuple[list[Mentor], int]:
        items = list(self.store.mentors.values())
        if query:
            term = query.lower()
            items = [
                item
                for item in items
                if any(term in spec.lower() for spec in item.specialization)
                or any(term in qual.lower() for qual in item.qualifications)
                or term in item.bio.lower()
            ]
        items.sort(key=lambda item: item.created_at, reverse=True)
        return paginate(items, limit, offset)

    async def update_mentor(self, mentor: Mentor, **changes) -> Mentor:
        for key, value in changes.items():
            setattr(mentor, key, value)
        mentor.updated_at = utc_now()
        return mentor

    async def add_course(self, mentor: Mentor, course_id: str) -> Mentor:
        if course_id not in mentor.assigned_courses:
            mentor.assigned_courses.append(course_id)
        mentor.updated_at = utc_now()
        return mentor

    async def remove_course(self, mentor: Mentor, course_id: str) -> Mentor:
        mentor.assigned_courses = [cid for cid in mentor.assigned_courses if cid != course_id]
        mentor.updated_at = utc_now()
        return mentor

    async def delete_mentor(self, mentor: Mentor) -> None:
        self.store.mentors.pop(mentor.id, None)
