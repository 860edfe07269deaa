"""Student domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from academy.shared.utils import new_id, utc_now


@dataclass
class EmergencyContact:
    name: str
    phone: str
    relationship: str


@dataclass
class Student:
    """Student enrolled by a parent account."""

    parent_id: str
    first_name: str
    last_name: str
    academic_level: str = ""
    date_of_birth: date | None = None
    email: str | None = None
    phone: str | None = None
    address: str = ""
    emergency_contact: EmergencyContact | None = None
    enrolled_courses: list[str] = field(default_factory=list)
    is_active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
