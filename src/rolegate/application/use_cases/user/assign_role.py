"""Assign role use case."""

from datetime import datetime
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize, ensure_can_delegate
from rolegate.application.use_cases.user.update_user import ensure_same_context, target_context
from rolegate.domain.entities import RoleAssignment, UserRecord
from rolegate.domain.exceptions import NotFound
from rolegate.domain.value_objects import AuditAction, AuditEntity


class AssignRoleUseCase:
    """Bind a role to a user, optionally for a bounded window.

    A live assignment of the same role is replaced rather than duplicated. The
    actor must itself hold every grant of the role at least as broadly.
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
        user_id: UUID,
        role_id: UUID,
        valid_from: datetime | None = None,
        valid_till: datetime | None = None,
    ) -> UserRecord:
        assignment = RoleAssignment(
            role_id=role_id, valid_from=valid_from, valid_till=valid_till
        )

        async with self._uow_factory() as uow:
            current = await uow.users.get_by_id(user_id)
        if not current:
            raise NotFound("User", str(user_id))
        await authorize(
            self._permission_checker, actor, "user.update", target_context(current)
        )

        async with self._uow_factory() as uow:
            # Share lock on the role races DeleteRole's update lock.
            role = await uow.roles.get_by_id(role_id, lock=RowLock.SHARE)
            if not role:
                raise NotFound("Role", str(role_id))
            await ensure_can_delegate(self._permission_checker, actor, role)
            user = await uow.users.get_by_id(user_id, lock=RowLock.UPDATE)
            if not user:
                raise NotFound("User", str(user_id))
            ensure_same_context(current, user)
            updated = user.with_assignment(assignment)
            await uow.users.update(updated)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.UPDATE, AuditEntity.USER, user.id)
            )
        return updated
