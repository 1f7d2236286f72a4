"""Teams API resources."""

import falcon.asgi

from rolegate.application.dto.representations import parse_uuid, team_to_dict
from rolegate.application.ports import PermissionChecker
from rolegate.application.use_cases.team.create_team import CreateTeamUseCase
from rolegate.application.use_cases.team.delete_team import DeleteTeamUseCase
from rolegate.application.use_cases.team.rename_team import RenameTeamUseCase
from rolegate.domain.exceptions import PermissionDenied
from rolegate.domain.value_objects import ResourceContext
from rolegate.interfaces.api.resources.common import read_object, require_user


class TeamsResource:
    """GET/POST /v1/teams - list visible teams and create teams."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        create_team: CreateTeamUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create = create_team

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List teams the caller holds team.read on."""
        user = require_user(req, resp)
        if not user:
            return

        async with self._uow_factory() as uow:
            teams = await uow.teams.list_all()
        visible = []
        for team in teams:
            decision = await self._permission_checker.check(
                user.user_id, "team.read", ResourceContext(team_id=team.id)
            )
            if decision.allowed:
                visible.append(team)
        if teams and not visible:
            raise PermissionDenied("User does not have team.read permission")
        resp.media = {"teams": [team_to_dict(t) for t in visible]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        team = await self._create.execute(user, str(body.get("name") or ""))
        resp.media = team_to_dict(team)
        resp.status = falcon.HTTP_201


class TeamResource:
    """PATCH/DELETE /v1/teams/{team_id}."""

    def __init__(self, rename_team: RenameTeamUseCase, delete_team: DeleteTeamUseCase) -> None:
        self._rename = rename_team
        self._delete = delete_team

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        team = await self._rename.execute(
            user, parse_uuid(team_id, "team id"), str(body.get("name") or "")
        )
        resp.media = team_to_dict(team)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, team_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        await self._delete.execute(user, parse_uuid(team_id, "team id"))
        resp.status = falcon.HTTP_204
