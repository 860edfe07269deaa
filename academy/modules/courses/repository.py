"""Courses repository layer."""

from __future__ import annotations

from academy.core.enums import CourseStatusEnum
from academy.core.store import StoreRepository
from academy.modules.courses.models import Course
from academy.shared.pagination import paginate
from academy.shared.utils import utc_now


class CoursesRepository(StoreRepository):
    """Store operations for courses."""

    async def add_course(self, course: Course) -> Course:
        self.store.courses[course.id] = course
        return course

    async def get_course_by_id(self, course_id: str) -> Course | None:
        return self.store.courses.get(course_id)

    async def list_courses(
        self,
        limit: int,
        offset: int,
        *,
        mentor_id: str | None = None,
        student_id: str | None = None,
        classroom_id: str | None = None,
        status: CourseStatusEnum | None = None,
        query: str | None = None,
    ) -> tuple[list[Course], int]:
        items = list(self.store.courses.values())
        if mentor_id is not None:
            items = [item for item in items if item.mentor_id == mentor_id]
        if student_id is not None:
            items = [item for item in items if student_id in item.enrolled_students]
        if classroom_id is not None:
            items = [item for item in items if item.classroom_id == classroom_id]
        if status is not None:
            items = [item for item in items if item.status == status]
        if query:
            term = query.lower()
            items = [
                item
                for item in items
                if term in item.name.lower()
                or term in item.description.lower()
                or term in item.category.lower()
            ]
        items.sort(key=lambda item: item.created_at, reverse=True)
        return paginate(items, limit, offset)

    async def list_courses_in_classroom(self, classroom_id: str) -> list[Course]:
        return [item for item in self.store.courses.values() if item.classroom_id == classroom_id]

    async def update_course(self, course: Course, **changes) -> Course:
        for key, value in changes.items():
            setattr(course, key, value)
        course.updated_at = utc_now()
        return course

    async def add_student(self, course: Course, student_id: str) -> Course:
        if student_id not in course.enrolled_students:
            course.enrolled_students.append(student_id)
        course.recount()
        course.updated_at = utc_now()
        return course

    async def remove_student(self, course: Course, student_id: str) -> Course:
        course.enrolled_students = [sid for sid in course.enrolled_students if sid != student_id]
        course.recount()
        course.updated_at = utc_now()
        return course

    async def set_mentor(
        self,
        course: Course,
        mentor_id: str,
        status: CourseStatusEnum | None = None,
    ) -> Course:
        course.mentor_id = mentor_id
        if status is not None:
            course.status = status
        course.updated_at = utc_now()
        return course

    async def delete_course(self, course: Course) -> None:
        self.store.courses.pop(course.id, None)
