"""Helpers shared by the command use cases."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.domain.entities import AuditFact, RoleRecord
from rolegate.domain.exceptions import PermissionDenied
from rolegate.domain.value_objects import AuditAction, AuditEntity, ResourceContext


async def authorize(
    permission_checker: PermissionChecker,
    actor: Actor,
    permission_key: str,
    context: ResourceContext | None = None,
) -> None:
    """Raise PermissionDenied unless actor holds permission_key for context."""
    decision = await permission_checker.check(
        actor.user_id, permission_key, context or ResourceContext()
    )
    if not decision.allowed:
        raise PermissionDenied(f"User does not have {permission_key} permission")


def audit_fact(
    actor: Actor, action: AuditAction, entity: AuditEntity, entity_id: UUID
) -> AuditFact:
    return AuditFact(
        id=uuid4(),
        actor_id=actor.user_id,
        action=action,
        entity=entity,
        entity_id=entity_id,
        at=datetime.now(UTC),
    )


async def ensure_can_delegate(
    permission_checker: PermissionChecker, actor: Actor, role: RoleRecord
) -> None:
    """Raise PermissionDenied if role carries a grant broader than the actor holds.

    Every non-revoked, active grant counts, whatever its window, so a role cannot
    be handed out now and widen the holder's rights later.
    """
    held = await permission_checker.effective_permissions(actor.user_id)
    for grant in role.grants:
        if grant.revoked or not grant.active:
            continue
        scope = held.get(grant.key)
        if scope is None or scope.breadth < grant.scope.breadth:
            raise PermissionDenied(
                f"Role {role.name} grants {grant.key} at {grant.scope.value} scope, "
                "beyond the acting user's own permissions"
            )
