"""Audit facts emitted by state-changing operations."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rolegate.domain.value_objects import AuditAction, AuditEntity


@dataclass(frozen=True)
class AuditFact:
    """Immutable record of who did what to which entity, and when."""

    id: UUID
    actor_id: UUID
    action: AuditAction
    entity: AuditEntity
    entity_id: UUID
    at: datetime


@dataclass(frozen=True)
class AuditLogEntry:
    """Stored audit fact joined with the actor's name and email."""

    id: UUID
    user_name: str | None
    user_email: str | None
    action: AuditAction
    entity: AuditEntity
    entity_id: UUID
    created_at: datetime
