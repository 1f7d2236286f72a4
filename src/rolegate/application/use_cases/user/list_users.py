"""List users use case - filtered to what the actor may read."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.use_cases.user.update_user import target_context
from rolegate.domain.entities import RoleRecord, TeamRecord, UserRecord
from rolegate.domain.exceptions import PermissionDenied
from rolegate.domain.services import AuthorizationEngine


@dataclass
class UserListing:
    """Visible users plus the teams and roles needed to render them."""

    users: list[UserRecord]
    teams: dict[UUID, TeamRecord]
    roles: dict[UUID, RoleRecord]


class ListUsersUseCase:
    """Return users the actor holds user.read on.

    The actor's snapshot is loaded once and every candidate is evaluated
    against it, so team- and self-scoped readers see only their slice.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        engine: AuthorizationEngine | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._engine = engine or AuthorizationEngine()

    async def execute(self, actor: Actor, as_of: datetime | None = None) -> UserListing:
        as_of = as_of or datetime.now(UTC)
        async with self._uow_factory() as uow:
            me = await uow.users.get_by_id(actor.user_id)
            if not me:
                raise PermissionDenied("User does not have user.read permission")
            my_roles = await uow.roles.get_many({a.role_id for a in me.assignments})
            users = await uow.users.list_all()
            teams = {t.id: t for t in await uow.teams.list_all()}
            roles = {r.id: r for r in await uow.roles.list_all()}

        visible = [
            u
            for u in users
            if self._engine.evaluate(me, my_roles, "user.read", target_context(u), as_of)
        ]
        if not visible:
            raise PermissionDenied("User does not have user.read permission")
        return UserListing(users=visible, teams=teams, roles=roles)
