"""Update role use case - description, activation and validity window."""

from dataclasses import replace
from datetime import datetime
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.entities import RoleRecord
from rolegate.domain.exceptions import NotFound
from rolegate.domain.value_objects import AuditAction, AuditEntity

_KEEP = object()


class UpdateRoleUseCase:
    """Update role attributes other than its name and grants."""

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
        *,
        description: str | None = None,
        is_active: bool | None = None,
        valid_from: datetime | None | object = _KEEP,
        valid_till: datetime | None | object = _KEEP,
    ) -> RoleRecord:
        """Apply the given changes; window bounds accept None to clear them."""
        await authorize(self._permission_checker, actor, "role.update")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, lock=RowLock.UPDATE)
            if not role:
                raise NotFound("Role", str(role_id))

            changes: dict = {}
            if description is not None:
                changes["description"] = description
            if is_active is not None:
                changes["is_active"] = is_active
            if valid_from is not _KEEP:
                changes["valid_from"] = valid_from
            if valid_till is not _KEEP:
                changes["valid_till"] = valid_till
            updated = replace(role, **changes)

            await uow.roles.update(updated)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.UPDATE, AuditEntity.ROLE, role.id)
            )
        return updated
