"""Audit repository layer."""

from __future__ import annotations

from academy.core.store import StoreRepository
from academy.modules.audit.models import AuditLog
from academy.shared.pagination import paginate


class AuditRepository(StoreRepository):
    """Store operations for the audit log."""

    async def create_audit_log(
        self,
        actor_id: str | None,
        action: str,
        entity_type: str,
        entity_id: str | None,
        payload: dict,
    ) -> AuditLog:
        log = AuditLog(
            actor_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            payload=payload,
        )
        self.store.audit_logs.append(log)
        return log

    async def list_audit_logs(
        self,
        limit: int,
        offset: int,
        entity_type: str | None = None,
        entity_id: str | None = None,
    ) -> tuple[list[AuditLog], int]:
        items = [
            log
            for log in reversed(self.store.audit_logs)
            if (entity_type is None or log.entity_type == entity_type)
            and (entity_id is None or log.entity_id == entity_id)
        ]
        return paginate(items, limit, offset)
