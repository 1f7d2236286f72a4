"""Revoke assignment use case."""

from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.application.use_cases.user.update_user import ensure_same_context, target_context
from rolegate.domain.entities import UserRecord
from rolegate.domain.exceptions import NotFound
from rolegate.domain.value_objects import AuditAction, AuditEntity


class RevokeAssignmentUseCase:
    """Mark a user's live assignments to a role as revoked."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor: Actor, user_id: UUID, role_id: UUID) -> UserRecord:
        async with self._uow_factory() as uow:
            current = await uow.users.get_by_id(user_id)
        if not current:
            raise NotFound("User", str(user_id))
        await authorize(
            self._permission_checker, actor, "user.update", target_context(current)
        )

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id, lock=RowLock.UPDATE)
            if not user:
                raise NotFound("User", str(user_id))
            ensure_same_context(current, user)
            if not user.holds_live_assignment(role_id):
                raise NotFound("Assignment", f"{user_id}/{role_id}")
            updated = user.revoke_role(role_id)
            await uow.users.update(updated)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.UPDATE, AuditEntity.USER, user.id)
            )
        return updated
