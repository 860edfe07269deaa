"""In-memory datastore shared by every ledger."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from academy.modules.audit.models import AuditLog
    from academy.modules.billing.models import Invoice, PaymentRecord
    from academy.modules.classrooms.models import Classroom
    from academy.modules.courses.models import Course
    from academy.modules.mentors.models import Mentor
    from academy.modules.students.models import Student


class InMemoryStore:
    """Process-local collections for all aggregates guarded by one writer lock.

    Two-sided relationship updates (student <-> course, mentor <-> course) touch
    several collections at once. Every mutating ledger operation runs inside
    ``transaction()`` so no reader observes one side updated without the other.
    """

    def __init__(self) -> None:
        self.students: dict[str, Student] = {}
        self.mentors: dict[str, Mentor] = {}
        self.courses: dict[str, Course] = {}
        self.classrooms: dict[str, Classroom] = {}
        self.invoices: dict[str, Invoice] = {}
        self.payments: list[PaymentRecord] = []
        self.audit_logs: list[AuditLog] = []
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InMemoryStore]:
        """Serialize a mutating operation against all other writers."""
        async with self._lock:
            yield self

    def counts(self) -> dict[str, int]:
        """Return collection sizes for readiness reporting."""
        return {
            "students": len(self.students),
            "mentors": len(self.mentors),
            "courses": len(self.courses),
            "classrooms": len(self.classrooms),
            "invoices": len(self.invoices),
            "payments": len(self.payments),
        }


class StoreRepository:
    """Base class for repositories backed by the in-memory store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def transaction(self):
        return self.store.transaction()


_store = InMemoryStore()


def get_store() -> InMemoryStore:
    """FastAPI dependency that provides the process-wide store."""
    return _store
