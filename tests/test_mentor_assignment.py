from __future__ import annotations

import pytest

from academy.core.enums import CourseStatusEnum
from academy.core.store import InMemoryStore
from academy.modules.audit.repository import AuditRepository
from academy.modules.classrooms.models import Classroom
from academy.modules.classrooms.repository import ClassroomsRepository
from academy.modules.courses.models import Course
from academy.modules.courses.repository import CoursesRepository
from academy.modules.courses.schemas import CourseCreate, CourseUpdate
from academy.modules.courses.service import CoursesService
from academy.modules.mentors.models import Mentor
from academy.modules.mentors.repository import MentorsRepository
from academy.modules.mentors.schemas import MentorCreate, MentorUpdate
from academy.modules.mentors.service import MentorsService
from academy.modules.scheduling.models import WeeklySlot
from academy.modules.students.repository import StudentsRepository
from academy.shared.exceptions import (
    AlreadyAssignedException,
    BusinessRuleException,
    ConflictException,
    NotFoundException,
)


def _make_service(store: InMemoryStore) -> MentorsService:
    return MentorsService(
        repository=MentorsRepository(store),
        courses_repository=CoursesRepository(store),
        audit_repository=AuditRepository(store),
    )


def _make_courses_service(store: InMemoryStore) -> CoursesService:
    return CoursesService(
        repository=CoursesRepository(store),
        classrooms_repository=ClassroomsRepository(store),
        mentors_repository=MentorsRepository(store),
        students_repository=StudentsRepository(store),
        audit_repository=AuditRepository(store),
    )


def _add_mentor(store: InMemoryStore, user_id: str = "user-1") -> Mentor:
    mentor = Mentor(user_id=user_id, display_name=f"Mentor {user_id}")
    store.mentors[mentor.id] = mentor
    return mentor


def _add_course(store: InMemoryStore, name: str = "Advanced Mathematics") -> Course:
    classroom = Classroom(name="Room A", capacity=20)
    store.classrooms[classroom.id] = classroom
    course = Course(name=name, classroom_id=classroom.id, max_students=15)
    store.courses[course.id] = course
    return course


def _assert_consistent(store: InMemoryStore) -> None:
    for mentor in store.mentors.values():
        for course_id in mentor.assigned_courses:
            assert store.courses[course_id].mentor_id == mentor.id
    for course in store.courses.values():
        if course.mentor_id:
            assert course.id in store.mentors[course.mentor_id].assigned_courses


@pytest.mark.asyncio
async def test_assign_links_mentor_and_course() -> None:
    store = InMemoryStore()
    mentor = _add_mentor(store)
    course = _add_course(store)

    result = await _make_service(store).assign_course(mentor.id, course.id)

    assert result.assigned_courses == [course.id]
    assert course.mentor_id == mentor.id
    _assert_consistent(store)


@pytest.mark.asyncio
async def test_assign_twice_raises_already_assigned() -> None:
    store = InMemoryStore()
    mentor = _add_mentor(store)
    course = _add_course(store)
    service = _make_service(store)
    await service.assign_course(mentor.id, course.id)

    with pytest.raises(AlreadyAssignedException):
        await service.assign_course(mentor.id, course.id)
    assert mentor.assigned_courses == [course.id]


@pytest.mark.asyncio
async def test_assign_unknown_ids_raise_not_found() -> None:
    store = InMemoryStore()
    mentor = _add_mentor(store)
    service = _make_service(store)

    with pytest.raises(NotFoundException):
        await service.assign_course("missing", "missing")
    with pytest.raises(NotFoundException):
        await service.assign_course(mentor.id, "missing")


@pytest.mark.asyncio
async def test_assign_moves_course_away_from_previous_mentor() -> None:
    store = InMemoryStore()
    first = _add_mentor(store, "user-1")
    second = _add_mentor(store, "user-2")
    course = _add_course(store)
    service = _make_service(store)
    await service.assign_course(first.id, course.id)

    await service.assign_course(second.id, course.id)

    assert first.assigned_courses == []
    assert second.assigned_courses == [course.id]
    assert course.mentor_id == second.id
    _assert_consistent(store)


@pytest.mark.asyncio
async def test_unassign_clears_course_and_marks_inactive() -> None:
    store = InMemoryStore()
    mentor = _add_mentor(store)
    course = _add_course(store)
    service = _make_service(store)
    await service.assign_course(mentor.id, course.id)

    await service.unassign_course(mentor.id, course.id)

    assert mentor.assigned_courses == []
    assert course.mentor_id == ""
    assert course.status == CourseStatusEnum.INACTIVE


@pytest.mark.asyncio
async def test_unassign_leaves_course_of_another_mentor_untouched() -> None:
    store = InMemoryStore()
    owner = _add_mentor(store, "user-1")
    other = _add_mentor(store, "user-2")
    course = _add_course(store)
    service = _make_service(store)
    await service.assign_course(owner.id, course.id)

    await service.unassign_course(other.id, course.id)

    assert course.mentor_id == owner.id
    assert course.status == CourseStatusEnum.ACTIVE
    _assert_consistent(store)


@pytest.mark.asyncio
async def test_delete_mentor_releases_all_courses() -> None:
    store = InMemoryStore()
    mentor = _add_mentor(store)
    first = _add_course(store, "Advanced Mathematics")
    second = _add_course(store, "Statistics")
    service = _make_service(store)
    await service.assign_course(mentor.id, first.id)
    await service.assign_course(mentor.id, second.id)

    await service.delete_mentor(mentor.id)

    assert mentor.id not in store.mentors
    for course in (first, second):
        assert course.mentor_id == ""
        assert course.status == CourseStatusEnum.INACTIVE


@pytest.mark.asyncio
async def test_create_mentor_rejects_duplicate_user() -> None:
    store = InMemoryStore()
    service = _make_service(store)
    await service.create_mentor(MentorCreate(user_id="user-1", display_name="John Mentor"))

    with pytest.raises(ConflictException):
        await service.create_mentor(MentorCreate(user_id="user-1", display_name="Second Profile"))

    found = await service.get_mentor_by_user("user-1")
    assert found.display_name == "John Mentor"


@pytest.mark.asyncio
async def test_course_update_moves_course_between_mentors_keeping_status() -> None:
    store = InMemoryStore()
    first = _add_mentor(store, "user-1")
    second = _add_mentor(store, "user-2")
    classroom = Classroom(name="Room A", capacity=20)
    store.classrooms[classroom.id] = classroom
    courses_service = _make_courses_service(store)
    course = await courses_service.create_course(
        CourseCreate(
            name="Physics Fundamentals",
            classroom_id=classroom.id,
            mentor_id=first.id,
            max_students=12,
        ),
    )
    assert first.assigned_courses == [course.id]

    await courses_service.update_course(course.id, CourseUpdate(mentor_id=second.id))

    assert first.assigned_courses == []
    assert second.assigned_courses == [course.id]
    assert course.status == CourseStatusEnum.ACTIVE
    _assert_consistent(store)


@pytest.mark.asyncio
async def test_course_create_requires_existing_mentor_and_classroom() -> None:
    store = InMemoryStore()
    classroom = Classroom(name="Room A", capacity=20)
    store.classrooms[classroom.id] = classroom
    courses_service = _make_courses_service(store)

    with pytest.raises(NotFoundException):
        await courses_service.create_course(
            CourseCreate(name="Physics", classroom_id="missing", max_students=5),
        )
    with pytest.raises(NotFoundException):
        await courses_service.create_course(
            CourseCreate(
                name="Physics",
                classroom_id=classroom.id,
                mentor_id="missing",
                max_students=5,
            ),
        )
    assert store.courses == {}


@pytest.mark.asyncio
async def test_course_update_rejects_capacity_below_enrollment() -> None:
    store = InMemoryStore()
    course = _add_course(store)
    course.enrolled_students = ["s1", "s2", "s3"]
    course.recount()

    with pytest.raises(BusinessRuleException):
        await _make_courses_service(store).update_course(course.id, CourseUpdate(max_students=2))
    assert course.max_students == 15


@pytest.mark.asyncio
async def test_assign_does_not_check_mentor_schedule_overlap() -> None:
    store = InMemoryStore()
    mentor = _add_mentor(store)
    slot = WeeklySlot(day_of_week=1, start_time="10:00", end_time="11:30")
    first = _add_course(store, "Advanced Mathematics")
    second = _add_course(store, "Statistics")
    first.schedule = [slot]
    second.schedule = [slot]
    service = _make_service(store)

    await service.assign_course(mentor.id, first.id)
    await service.assign_course(mentor.id, second.id)

    assert mentor.assigned_courses == [first.id, second.id]


@pytest.mark.asyncio
async def test_get_mentor_by_unknown_user_raises_not_found() -> None:
    service = _make_service(InMemoryStore())

    with pytest.raises(NotFoundException):
        await service.get_mentor_by_user("user-404")


@pytest.mark.asyncio
async def test_list_mentors_searches_specialization_and_bio() -> None:
    service = _make_service(InMemoryStore())
    maths = await service.create_mentor(
        MentorCreate(user_id="user-1", display_name="John Mentor", specialization=["Mathematics"]),
    )
    physics = await service.create_mentor(
        MentorCreate(user_id="user-2", display_name="Jane Mentor", bio="Physics olympiad coach"),
    )

    items, total = await service.list_mentors(10, 0, query="mathem")
    assert (items, total) == ([maths], 1)

    items, _ = await service.list_mentors(10, 0, query="OLYMPIAD")
    assert items == [physics]


@pytest.mark.asyncio
async def test_update_mentor_is_audited() -> None:
    store = InMemoryStore()
    service = _make_service(store)
    mentor = await service.create_mentor(MentorCreate(user_id="user-1", display_name="John Mentor"))

    await service.update_mentor(mentor.id, MentorUpdate(experience_years=7))

    assert mentor.experience_years == 7
    assert store.audit_logs[-1].action == "mentors.mentor.update"
    assert store.audit_logs[-1].payload == {"fields": ["experience_years"]}
