"""Domain entities."""

from rolegate.domain.entities.audit import AuditFact, AuditLogEntry
from rolegate.domain.entities.role import PermissionGrant, RoleRecord
from rolegate.domain.entities.team import TeamRecord
from rolegate.domain.entities.user import RoleAssignment, UserRecord

__all__ = [
    "AuditFact",
    "AuditLogEntry",
    "PermissionGrant",
    "RoleAssignment",
    "RoleRecord",
    "TeamRecord",
    "UserRecord",
]
