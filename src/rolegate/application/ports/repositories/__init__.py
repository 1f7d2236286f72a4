"""Repository ports."""

from rolegate.application.ports.repositories.audit_log_repository import (
    AuditLogRepository,
)
from rolegate.application.ports.repositories.locking import RowLock
from rolegate.application.ports.repositories.role_repository import RoleRepository
from rolegate.application.ports.repositories.team_repository import TeamRepository
from rolegate.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "AuditLogRepository",
    "RoleRepository",
    "RowLock",
    "TeamRepository",
    "UserRepository",
]
