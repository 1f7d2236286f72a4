"""Delete user use case."""

from dataclasses import replace
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.application.use_cases.user.update_user import ensure_same_context, target_context
from rolegate.domain.exceptions import NotFound, ValidationError
from rolegate.domain.value_objects import AuditAction, AuditEntity


class DeleteUserUseCase:
    """Delete a user, or deactivate it when the audit trail references it."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor: Actor, user_id: UUID) -> bool:
        """Return True if the user was deleted, False if it was deactivated."""
        if actor.user_id == user_id:
            raise ValidationError("Users cannot delete themselves")

        async with self._uow_factory() as uow:
            current = await uow.users.get_by_id(user_id)
        if not current:
            raise NotFound("User", str(user_id))
        await authorize(
            self._permission_checker, actor, "user.delete", target_context(current)
        )

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id, lock=RowLock.UPDATE)
            if not user:
                raise NotFound("User", str(user_id))
            ensure_same_context(current, user)
            deleted = not await uow.audit_logs.has_actor(user_id)
            if deleted:
                await uow.users.delete(user_id)
            else:
                await uow.users.update(replace(user, is_active=False))
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.DELETE, AuditEntity.USER, user_id)
            )
        return deleted
