"""Delete team use case."""

import logging
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.exceptions import NotFound, TeamInUse
from rolegate.domain.value_objects import AuditAction, AuditEntity, ResourceContext

logger = logging.getLogger(__name__)


class DeleteTeamUseCase:
    """Delete a team that no user belongs to."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor: Actor, team_id: UUID) -> None:
        """Delete team. Raises TeamInUse while any user still references it."""
        await authorize(
            self._permission_checker, actor, "team.delete", ResourceContext(team_id=team_id)
        )

        async with self._uow_factory() as uow:
            team = await uow.teams.get_by_id(team_id, lock=RowLock.UPDATE)
            if not team:
                raise NotFound("Team", str(team_id))
            if await uow.users.any_in_team(team_id):
                raise TeamInUse(f"Team {team.name} still has members")
            await uow.teams.delete(team_id)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.DELETE, AuditEntity.TEAM, team_id)
            )
        logger.info("Team %s (%s) deleted by %s", team.name, team_id, actor.user_id)
