"""Set role permission use case - upsert or delete one grant by key."""

from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.dto.grant_spec import GrantSpec
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain import permission_catalog
from rolegate.domain.entities import PermissionGrant, RoleRecord
from rolegate.domain.exceptions import NotFound
from rolegate.domain.value_objects import AuditAction, AuditEntity


class SetRolePermissionUseCase:
    """Replace or remove the grant for a permission key on a role.

    Passing desired=None removes the grant. Any other value replaces whatever
    grant the role held for the key, so a role never stacks grants per key.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        actor: Actor,
        role_id: UUID,
        key: str,
        desired: GrantSpec | None,
    ) -> RoleRecord:
        permission_catalog.require_known(key)
        await authorize(self._permission_checker, actor, "role.update")

        grant = None
        if desired is not None:
            grant = PermissionGrant(
                key=key,
                scope=desired.scope,
                valid_from=desired.valid_from,
                valid_till=desired.valid_till,
            )

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, lock=RowLock.UPDATE)
            if not role:
                raise NotFound("Role", str(role_id))
            updated = role.with_grant(key, grant)
            await uow.roles.update(updated)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.UPDATE, AuditEntity.ROLE, role.id)
            )
        return updated
