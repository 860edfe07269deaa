"""Students repository layer."""

from __future__ import annotations

from academy.core.store import StoreRepository
from academy.modules.students.models import Student
from academy.shared.pagination import paginate
from academy.shared.utils import utc_now


class StudentsRepository(StoreRepository):
    """Store operations for students."""

    async def add_student(self, student: Student) -> Student:
        self.store.students[student.id] = student
        return student

    async def get_student_by_id(self, student_id: str) -> Student | None:
        return self.store.students.get(student_id)

    async def list_students(
        self,
        limit: int,
        offset: int,
        *,
        parent_id: str | None = None,
        query: str | None = None,
    ) -> tuple[list[Student], int]:
        items = list(self.store.students.values())
        if parent_id is not None:
            items = [item for item in items if item.parent_id == parent_id]
        if query:
            term = query.lower()
            items = [
                item
                for item in items
                if term in item.first_name.lower()
                or term in item.last_name.lower()
                or term in (item.email or "").lower()
                or term in item.academic_level.lower()
            ]
        items.sort(key=lambda item: item.created_at, reverse=True)
        return paginate(items, limit, offset)

    async def update_student(self, student: Student, **changes) -> Student:
        for key, value in changes.items():
            setattr(student, key, value)
        student.updated_at = utc_now()
        return student

    async def add_course(self, student: Student, course_id: str) -> Student:
        if course_id not in student.enrolled_courses:
            student.enrolled_courses.append(course_id)
        student.updated_at = utc_now()
        return student

    async def remove_course(self, student: Student, course_id: str) -> Student:
        student.enrolled_courses = [cid for cid in student.enrolled_courses if cid != course_id]
        student.updated_at = utc_now()
        return student

    async def delete_student(self, student: Student) -> None:
        self.store.students.pop(student.id, None)
