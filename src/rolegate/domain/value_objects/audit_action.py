"""Audit fact vocabulary."""

from enum import StrEnum


class AuditAction(StrEnum):
    """State-changing actions recorded in the audit trail."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"


class AuditEntity(StrEnum):
    """Entity kinds an audit fact can refer to."""

    ROLE = "Role"
    USER = "User"
    TEAM = "Team"
