"""Audit business logic layer."""

from __future__ import annotations

from fastapi import Depends

from academy.core.store import InMemoryStore, get_store
from academy.modules.audit.models import AuditLog
from academy.modules.audit.repository import AuditRepository


class AuditService:
    """Read access to the audit log."""

    def __init__(self, repository: AuditRepository) -> None:
        self.repository = repository

    async def list_logs(
        self,
        limit: int,
        offset: int,
        entity_type: str | None = None,
        entity_id: str | None = None,
    ) -> tuple[list[AuditLog], int]:
        """List audit logs, newest first."""
        return await self.repository.list_audit_logs(
            limit=limit,
            offset=offset,
            entity_type=entity_type,
            entity_id=entity_id,
        )


async def get_audit_service(store: InMemoryStore = Depends(get_store)) -> AuditService:
    """Dependency provider for audit service."""
    return AuditService(AuditRepository(store))
