from __future__ import annotations

import pytest

from academy.core.store import InMemoryStore
from academy.modules.classrooms.models import Classroom
from academy.modules.courses.models import Course
from academy.modules.courses.repository import CoursesRepository
from academy.modules.mentors.models import Mentor
from academy.modules.mentors.repository import MentorsRepository
from academy.modules.scheduling.models import WeeklySlot
from academy.modules.scheduling.service import SchedulingService


def _make_service(store: InMemoryStore) -> SchedulingService:
    return SchedulingService(
        courses_repository=CoursesRepository(store),
        mentors_repository=MentorsRepository(store),
    )


def _add_classroom(store: InMemoryStore, name: str = "Room A") -> Classroom:
    classroom = Classroom(name=name, capacity=20)
    store.classrooms[classroom.id] = classroom
    return classroom


def _add_course(
    store: InMemoryStore,
    classroom: Classroom,
    name: str,
    schedule: list[WeeklySlot],
    mentor_id: str = "",
) -> Course:
    course = Course(
        name=name,
        classroom_id=classroom.id,
        max_students=15,
        schedule=schedule,
        mentor_id=mentor_id,
    )
    store.courses[course.id] = course
    return course


MONDAY_MORNING = WeeklySlot(day_of_week=1, start_time="10:00", end_time="11:30")
WEDNESDAY_MORNING = WeeklySlot(day_of_week=3, start_time="10:00", end_time="11:30")


@pytest.mark.asyncio
async def test_overlapping_candidate_reports_conflict() -> None:
    store = InMemoryStore()
    room = _add_classroom(store)
    course = _add_course(store, room, "Advanced Mathematics", [MONDAY_MORNING, WEDNESDAY_MORNING])

    report = await _make_service(store).find_conflicts(
        room.id,
        [WeeklySlot(day_of_week=1, start_time="11:00", end_time="12:00")],
    )

    assert report.has_conflict is True
    assert [item.id for item in report.conflicting_courses] == [course.id]


@pytest.mark.asyncio
async def test_touching_slot_does_not_conflict() -> None:
    store = InMemoryStore()
    room = _add_classroom(store)
    _add_course(store, room, "Advanced Mathematics", [MONDAY_MORNING])

    report = await _make_service(store).find_conflicts(
        room.id,
        [WeeklySlot(day_of_week=1, start_time="11:30", end_time="13:00")],
    )

    assert report.has_conflict is False
    assert report.conflicting_courses == ()


@pytest.mark.asyncio
async def test_conflicts_ignore_other_classrooms_and_excluded_course() -> None:
    store = InMemoryStore()
    room_a = _add_classroom(store, "Room A")
    room_b = _add_classroom(store, "Room B")
    course = _add_course(store, room_a, "Advanced Mathematics", [MONDAY_MORNING])
    _add_course(store, room_b, "Physics Fundamentals", [MONDAY_MORNING])
    service = _make_service(store)

    report = await service.find_conflicts(room_a.id, [MONDAY_MORNING], exclude_course_id=course.id)

    assert report.has_conflict is False


@pytest.mark.asyncio
async def test_conflicts_are_deduplicated_in_first_occurrence_order() -> None:
    store = InMemoryStore()
    room = _add_classroom(store)
    maths = _add_course(store, room, "Advanced Mathematics", [MONDAY_MORNING, WEDNESDAY_MORNING])
    physics = _add_course(
        store,
        room,
        "Physics Fundamentals",
        [WeeklySlot(day_of_week=3, start_time="11:00", end_time="12:00")],
    )

    report = await _make_service(store).find_conflicts(
        room.id,
        [MONDAY_MORNING, WEDNESDAY_MORNING],
    )

    assert [item.id for item in report.conflicting_courses] == [maths.id, physics.id]


@pytest.mark.asyncio
async def test_classroom_schedule_is_sorted_with_mentor_names() -> None:
    store = InMemoryStore()
    room = _add_classroom(store)
    mentor = Mentor(user_id="user-1", display_name="John Mentor")
    store.mentors[mentor.id] = mentor
    _add_course(
        store,
        room,
        "Physics Fundamentals",
        [WeeklySlot(day_of_week=2, start_time="14:00", end_time="15:30")],
    )
    _add_course(
        store,
        room,
        "Advanced Mathematics",
        [WEDNESDAY_MORNING, MONDAY_MORNING],
        mentor_id=mentor.id,
    )

    schedule = await _make_service(store).get_classroom_schedule(room.id)

    assert [(entry.day_of_week, entry.start_time) for entry in schedule] == [
        (1, "10:00"),
        (2, "14:00"),
        (3, "10:00"),
    ]
    assert schedule[0].mentor_name == "John Mentor"
    assert schedule[1].mentor_name == ""
    assert all(entry.is_recurring for entry in schedule)
    assert all(entry.classroom_id == room.id for entry in schedule)


@pytest.mark.asyncio
async def test_classroom_availability_uses_half_open_windows() -> None:
    store = InMemoryStore()
    room = _add_classroom(store)
    _add_course(store, room, "Advanced Mathematics", [MONDAY_MORNING])
    service = _make_service(store)

    assert await service.is_classroom_available(room.id, 1, "11:00", "12:00") is False
    assert await service.is_classroom_available(room.id, 1, "11:30", "12:30") is True
    assert await service.is_classroom_available(room.id, 2, "10:00", "11:30") is True
    assert await service.is_classroom_available("unknown", 1, "10:00", "11:00") is True
