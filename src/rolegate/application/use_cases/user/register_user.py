"""Register user use case."""

from collections.abc import Sequence
from uuid import UUID, uuid4

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize, ensure_can_delegate
from rolegate.domain.entities import RoleAssignment, UserRecord
from rolegate.domain.entities.user import normalize_email
from rolegate.domain.exceptions import DuplicateEmail, NotFound
from rolegate.domain.value_objects import AuditAction, AuditEntity


class RegisterUserUseCase:
    """Create a user with an optional team and initial role assignments.

    Credentials live in the identity provider; only the profile is stored here.
    Initial roles are subject to the same delegation limit as AssignRole.
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
        name: str,
        email: str,
        team_id: UUID | None = None,
        assignments: Sequence[RoleAssignment] = (),
    ) -> UserRecord:
        await authorize(self._permission_checker, actor, "user.create")

        user = UserRecord(
            id=uuid4(),
            name=name.strip() if name else name,
            email=normalize_email(email),
            team_id=team_id,
            assignments=tuple(assignments),
        )

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(user.email):
                raise DuplicateEmail(f"User with email {user.email} already exists")
            if team_id is not None and not await uow.teams.get_by_id(team_id, lock=RowLock.SHARE):
                raise NotFound("Team", str(team_id))
            for assignment in user.assignments:
                role = await uow.roles.get_by_id(assignment.role_id, lock=RowLock.SHARE)
                if not role:
                    raise NotFound("Role", str(assignment.role_id))
                await ensure_can_delegate(self._permission_checker, actor, role)
            await uow.users.create(user)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.CREATE, AuditEntity.USER, user.id)
            )
        return user
