"""Create role use case."""

from collections.abc import Sequence
from datetime import datetime
from uuid import uuid4

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.entities import PermissionGrant, RoleRecord
from rolegate.domain.entities.role import normalize_role_name
from rolegate.domain.exceptions import DuplicateName
from rolegate.domain.value_objects import AuditAction, AuditEntity


class CreateRoleUseCase:
    """Create a role with its initial grants."""

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
        name: str,
        description: str = "",
        initial_grants: Sequence[PermissionGrant] = (),
        valid_from: datetime | None = None,
        valid_till: datetime | None = None,
    ) -> RoleRecord:
        """Create role. Name is unique after upper-casing."""
        await authorize(self._permission_checker, actor, "role.create")

        role = RoleRecord(
            id=uuid4(),
            name=normalize_role_name(name),
            description=description or "",
            valid_from=valid_from,
            valid_till=valid_till,
            grants=tuple(initial_grants),
        )

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(role.name):
                raise DuplicateName(f"Role {role.name} already exists")
            await uow.roles.create(role)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.CREATE, AuditEntity.ROLE, role.id)
            )
        return role
