"""Delete role use case."""

import logging
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.exceptions import NotFound, RoleInUse
from rolegate.domain.value_objects import AuditAction, AuditEntity

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Delete a role nobody holds a non-revoked assignment to."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor: Actor, role_id: UUID) -> None:
        """Delete role. Referenced roles must be deactivated instead."""
        await authorize(self._permission_checker, actor, "role.delete")

        async with self._uow_factory() as uow:
            # The row lock blocks concurrent assignments until the check is done.
            role = await uow.roles.get_by_id(role_id, lock=RowLock.UPDATE)
            if not role:
                raise NotFound("Role", str(role_id))
            if await uow.users.any_with_live_assignment(role_id):
                raise RoleInUse(f"Role {role.name} is assigned to at least one user")
            await uow.roles.delete(role_id)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.DELETE, AuditEntity.ROLE, role_id)
            )
        logger.info("Role %s (%s) deleted by %s", role.name, role_id, actor.user_id)
