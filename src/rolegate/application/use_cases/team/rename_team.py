"""Rename team use case."""

from dataclasses import replace
from uuid import UUID

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.ports.repositories import RowLock
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.entities import TeamRecord
from rolegate.domain.entities.team import normalize_team_name
from rolegate.domain.exceptions import DuplicateName, NotFound
from rolegate.domain.value_objects import AuditAction, AuditEntity, ResourceContext


class RenameTeamUseCase:
    """Give a team a new unique name."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor: Actor, team_id: UUID, name: str) -> TeamRecord:
        new_name = normalize_team_name(name)
        await authorize(
            self._permission_checker, actor, "team.update", ResourceContext(team_id=team_id)
        )

        async with self._uow_factory() as uow:
            team = await uow.teams.get_by_id(team_id, lock=RowLock.UPDATE)
            if not team:
                raise NotFound("Team", str(team_id))
            other = await uow.teams.get_by_name(new_name)
            if other and other.id != team_id:
                raise DuplicateName(f"Team {new_name} already exists")
            updated = replace(team, name=new_name)
            await uow.teams.update(updated)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.UPDATE, AuditEntity.TEAM, team_id)
            )
        return updated
