"""Update user use case - profile, activation and team membership."""

from dataclasses import replace
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.entities import UserRecord
from rolegate.domain.entities.user import normalize_email
from rolegate.domain.exceptions import DuplicateEmail, NotFound, PermissionDenied
from rolegate.domain.value_objects import AuditAction, AuditEntity, ResourceContext


def target_context(user: UserRecord) -> ResourceContext:
    """Resource context of a user record: owned by itself, within its team."""
    return ResourceContext(team_id=user.team_id, owner_id=user.id)


def ensure_same_context(authorized: UserRecord, locked: UserRecord) -> None:
    """Raise PermissionDenied if the target moved after authorization was checked."""
    if target_context(authorized) != target_context(locked):
        raise PermissionDenied("User changed team while the request was processed")


class UpdateUserUseCase:
    """Update name, email, activation or team of a user."""

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
        *,
        name: str | None = None,
        email: str | None = None,
        is_active: bool | None = None,
        team_id: UUID | None = None,
        clear_team: bool = False,
    ) -> UserRecord:
        async with self._uow_factory() as uow:
            current = await uow.users.get_by_id(user_id)
        if not current:
            raise NotFound("User", str(user_id))
        await authorize(
            self._permission_checker, actor, "user.update", target_context(current)
        )
        if team_id is not None and team_id != current.team_id:
            # Moving a user also needs rights over the destination team.
            await authorize(
                self._permission_checker,
                actor,
                "user.update",
                ResourceContext(team_id=team_id),
            )

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id, lock=RowLock.UPDATE)
            if not user:
                raise NotFound("User", str(user_id))
            ensure_same_context(current, user)

            changes: dict = {}
            if name is not None:
                changes["name"] = name.strip()
            if email is not None:
                normalized = normalize_email(email)
                if normalized != user.email:
                    other = await uow.users.get_by_email(normalized)
                    if other and other.id != user.id:
                        raise DuplicateEmail(f"User with email {normalized} already exists")
                changes["email"] = normalized
            if is_active is not None:
                changes["is_active"] = is_active
            if clear_team:
                changes["team_id"] = None
            elif team_id is not None:
                if not await uow.teams.get_by_id(team_id, lock=RowLock.SHARE):
                    raise NotFound("Team", str(team_id))
                changes["team_id"] = team_id
            updated = replace(user, **changes)

            await uow.users.update(updated)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.UPDATE, AuditEntity.USER, user.id)
            )
        return updated
