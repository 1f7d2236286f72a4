"""Audit log repository port - the audit recorder."""

from typing import Protocol
from uuid import UUID

from rolegate.domain.entities import AuditFact, AuditLogEntry
from rolegate.domain.value_objects import AuditAction, AuditEntity


class AuditLogRepository(Protocol):
    """Port that records audit facts and reads them back for display."""

    async def record(self, fact: AuditFact) -> None: ...

    async def list(
        self,
        *,
        action: AuditAction | None = None,
        entity: AuditEntity | None = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]: ...

    async def has_actor(self, user_id: UUID) -> bool: ...
