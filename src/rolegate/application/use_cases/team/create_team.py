"""Create team use case."""

from datetime import UTC, datetime
from uuid import uuid4

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.use_cases.common import audit_fact, authorize
from rolegate.domain.entities import TeamRecord
from rolegate.domain.entities.team import normalize_team_name
from rolegate.domain.exceptions import DuplicateName
from rolegate.domain.value_objects import AuditAction, AuditEntity


class CreateTeamUseCase:
    """Create a team with a unique name."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor: Actor, name: str) -> TeamRecord:
        await authorize(self._permission_checker, actor, "team.create")
        team = TeamRecord(id=uuid4(), name=normalize_team_name(name), created_at=datetime.now(UTC))

        async with self._uow_factory() as uow:
            if await uow.teams.get_by_name(team.name):
                raise DuplicateName(f"Team {team.name} already exists")
            await uow.teams.create(team)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.CREATE, AuditEntity.TEAM, team.id)
            )
        return team
