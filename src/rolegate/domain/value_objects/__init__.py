"""Domain value objects."""

from rolegate.domain.value_objects.audit_action import AuditAction, AuditEntity
from rolegate.domain.value_objects.decision import Decision, DenyReason, ResourceContext
from rolegate.domain.value_objects.scope import Scope

__all__ = [
    "AuditAction",
    "AuditEntity",
    "Decision",
    "DenyReason",
    "ResourceContext",
    "Scope",
]
