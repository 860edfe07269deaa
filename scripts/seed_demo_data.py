"""Seed demo data into a running academy API over HTTP."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from datetime import date, timedelta

import httpx

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_API_PREFIX = "/api/v1"

DEMO_CLASSROOMS = (
    {
        "name": "Room A",
        "capacity": 20,
        "location": "Building 1, Floor 2",
        "equipment": ["Projector", "Whiteboard", "Computers"],
    },
    {
        "name": "Room B",
        "capacity": 15,
        "location": "Building 1, Floor 3",
        "equipment": ["Whiteboard", "Lab Equipment"],
    },
    {
        "name": "Room C",
        "capacity": 10,
        "location": "Building 2, Floor 1",
        "equipment": ["Whiteboard"],
    },
)

DEMO_MENTORS = (
    {
        "user_id": "demo-mentor-1",
        "display_name": "John Mentor",
        "bio": "Mathematics teacher focused on exam preparation.",
        "experience_years": 8,
        "hourly_rate": "45",
        "specialization": ["Mathematics", "Statistics"],
        "qualifications": ["MSc Mathematics"],
    },
    {
        "user_id": "demo-mentor-2",
        "display_name": "Sarah Physics",
        "bio": "Physics teacher with a lab-first approach.",
        "experience_years": 5,
        "hourly_rate": "40",
        "specialization": ["Physics"],
        "qualifications": ["BSc Physics", "Teaching Certificate"],
    },
)

# classroom index, mentor index, course payload
DEMO_COURSES = (
    (
        0,
        0,
        {
            "name": "Advanced Mathematics",
            "description": "Calculus and linear algebra for senior students.",
            "duration_weeks": 12,
            "max_students": 15,
            "price": "350",
            "level": "advanced",
            "category": "Mathematics",
            "schedule": [
                {"day_of_week": 1, "start_time": "10:00", "end_time": "11:30"},
                {"day_of_week": 3, "start_time": "10:00", "end_time": "11:30"},
            ],
        },
    ),
    (
        1,
        1,
        {
            "name": "Physics Fundamentals",
            "description": "Mechanics and energy with weekly lab work.",
            "duration_weeks": 10,
            "max_students": 12,
            "price": "150",
            "level": "beginner",
            "category": "Science",
            "schedule": [
                {"day_of_week": 2, "start_time": "14:00", "end_time": "15:30"},
                {"day_of_week": 4, "start_time": "14:00", "end_time": "15:30"},
            ],
        },
    ),
)

# student payload, enrolled course indexes
DEMO_STUDENTS = (
    (
        {
            "parent_id": "demo-parent-1",
            "first_name": "Alice",
            "last_name": "Johnson",
            "academic_level": "Grade 10",
            "email": "alice@example.com",
        },
        (0, 1),
    ),
    (
        {
            "parent_id": "demo-parent-1",
            "first_name": "Bob",
            "last_name": "Johnson",
            "academic_level": "Grade 8",
        },
        (1,),
    ),
    (
        {
            "parent_id": "demo-parent-2",
            "first_name": "Emma",
            "last_name": "Wilson",
            "academic_level": "Grade 11",
            "email": "emma@example.com",
        },
        (0,),
    ),
)


@dataclass(slots=True)
class SeedStats:
    classroom_ids: list[str] = field(default_factory=list)
    mentor_ids: list[str] = field(default_factory=list)
    course_ids: list[str] = field(default_factory=list)
    student_ids: list[str] = field(default_factory=list)
    enrollments: int = 0
    invoice_ids: list[str] = field(default_factory=list)


def _post(client: httpx.Client, path: str, payload: dict | None = None) -> dict:
    response = client.post(path, json=payload)
    if response.status_code >= 400:
        raise RuntimeError(f"POST {path} -> {response.status_code}: {response.text}")
    return response.json()


def _run_seed(client: httpx.Client) -> SeedStats:
    stats = SeedStats()

    for classroom in DEMO_CLASSROOMS:
        stats.classroom_ids.append(_post(client, "/classrooms", classroom)["id"])

    for mentor in DEMO_MENTORS:
        stats.mentor_ids.append(_post(client, "/mentors", mentor)["id"])

    for classroom_index, mentor_index, course in DEMO_COURSES:
        payload = {
            **course,
            "classroom_id": stats.classroom_ids[classroom_index],
            "mentor_id": stats.mentor_ids[mentor_index],
        }
        stats.course_ids.append(_post(client, "/courses", payload)["id"])

    for student, course_indexes in DEMO_STUDENTS:
        student_id = _post(client, "/students", student)["id"]
        stats.student_ids.append(student_id)
        for course_index in course_indexes:
            course_id = stats.course_ids[course_index]
            _post(client, f"/enrollment/students/{student_id}/courses/{course_id}")
            stats.enrollments += 1

    today = date.today()
    invoices = (
        (DEMO_STUDENTS[0][0]["parent_id"], stats.student_ids[0], "350", DEMO_COURSES[0][2]),
        (DEMO_STUDENTS[1][0]["parent_id"], stats.student_ids[1], "150", DEMO_COURSES[1][2]),
    )
    for index, (parent_id, student_id, amount, course) in enumerate(invoices):
        payload = {
            "parent_id": parent_id,
            "student_id": student_id,
            "amount": amount,
            "issue_date": today.isoformat(),
            "due_date": (today + timedelta(days=30)).isoformat(),
            "items": [
                {
                    "course_id": stats.course_ids[index],
                    "course_name": course["name"],
                    "quantity": 1,
                    "unit_price": amount,
                    "total_price": amount,
                },
            ],
        }
        stats.invoice_ids.append(_post(client, "/billing/invoices", payload)["id"])

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Seed demo data (classrooms, mentors, courses, students, enrollments, "
            "invoices) into a running academy API."
        ),
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API server base URL.")
    parser.add_argument(
        "--api-prefix",
        default=DEFAULT_API_PREFIX,
        help="Router prefix configured by API_PREFIX.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Classrooms created: {len(stats.classroom_ids)}")
    print(f"- Mentors created: {len(stats.mentor_ids)}")
    print(f"- Courses created: {len(stats.course_ids)}")
    print(f"- Students created: {len(stats.student_ids)}")
    print(f"- Enrollments: {stats.enrollments}")
    print(f"- Invoices created: {len(stats.invoice_ids)}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    base_url = f"{args.base_url.rstrip('/')}{args.api_prefix}"
    try:
        with httpx.Client(base_url=base_url, timeout=30) as client:
            stats = _run_seed(client)
    except (httpx.HTTPError, RuntimeError) as exc:
        print(f"Demo seed failed: {exc}")
        return 1

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
