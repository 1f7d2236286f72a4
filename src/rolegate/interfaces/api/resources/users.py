"""Users API resources."""

import falcon.asgi

from rolegate.application.dto.representations import (
    assignment_from_dict,
    parse_instant,
    parse_optional_uuid,
    parse_uuid,
    user_to_dict,
)
from rolegate.application.ports import PermissionChecker
from rolegate.application.use_cases.common import authorize
from rolegate.application.use_cases.user.assign_role import AssignRoleUseCase
from rolegate.application.use_cases.user.delete_user import DeleteUserUseCase
from rolegate.application.use_cases.user.list_users import ListUsersUseCase
from rolegate.application.use_cases.user.register_user import RegisterUserUseCase
from rolegate.application.use_cases.user.revoke_assignment import RevokeAssignmentUseCase
from rolegate.application.use_cases.user.update_user import (
    UpdateUserUseCase,
    target_context,
)
from rolegate.domain.entities import UserRecord
from rolegate.domain.exceptions import NotFound
from rolegate.interfaces.api.resources.common import read_object, require_user


async def _render(uow, user: UserRecord) -> dict:
    team = await uow.teams.get_by_id(user.team_id) if user.team_id else None
    roles = await uow.roles.get_many({a.role_id for a in user.assignments})
    return user_to_dict(user, team, roles)


class UsersResource:
    """GET/POST /v1/users - list visible users and register new ones."""

    def __init__(
        self,
        unit_of_work_factory: type,
        list_users: ListUsersUseCase,
        register_user: RegisterUserUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._list = list_users
        self._register = register_user

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        listing = await self._list.execute(user)
        resp.media = {
            "users": [
                user_to_dict(u, listing.teams.get(u.team_id), listing.roles)
                for u in listing.users
            ]
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        created = await self._register.execute(
            user,
            name=str(body.get("name") or ""),
            email=str(body.get("email") or ""),
            team_id=parse_optional_uuid(body.get("teamId"), "teamId"),
            assignments=[assignment_from_dict(a) for a in body.get("roles") or []],
        )
        async with self._uow_factory() as uow:
            resp.media = await _render(uow, created)
        resp.status = falcon.HTTP_201


class UserResource:
    """GET/PATCH/DELETE /v1/users/{user_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        update_user: UpdateUserUseCase,
        delete_user: DeleteUserUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._update = update_user
        self._delete = delete_user

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        uid = parse_uuid(user_id, "user id")
        async with self._uow_factory() as uow:
            target = await uow.users.get_by_id(uid)
            if not target:
                raise NotFound("User", user_id)
            body = await _render(uow, target)
        await authorize(self._permission_checker, user, "user.read", target_context(target))
        resp.media = body
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        changes = {}
        if "name" in body:
            changes["name"] = str(body["name"] or "")
        if "email" in body:
            changes["email"] = str(body["email"] or "")
        if "isActive" in body:
            changes["is_active"] = bool(body["isActive"])
        if "teamId" in body:
            team_id = parse_optional_uuid(body["teamId"], "teamId")
            if team_id is None:
                changes["clear_team"] = True
            else:
                changes["team_id"] = team_id

        updated = await self._update.execute(user, parse_uuid(user_id, "user id"), **changes)
        async with self._uow_factory() as uow:
            resp.media = await _render(uow, updated)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        deleted = await self._delete.execute(user, parse_uuid(user_id, "user id"))
        resp.media = {"deleted": deleted, "deactivated": not deleted}
        resp.status = falcon.HTTP_200


class UserRolesResource:
    """POST /v1/users/{user_id}/roles - assign a role."""

    def __init__(self, unit_of_work_factory: type, assign_role: AssignRoleUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._assign = assign_role

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        role_ref = body.get("role")
        if isinstance(role_ref, dict):
            role_ref = role_ref.get("id")
        updated = await self._assign.execute(
            user,
            parse_uuid(user_id, "user id"),
            parse_uuid(role_ref, "role id"),
            valid_from=parse_instant(body.get("validFrom")),
            valid_till=parse_instant(body.get("validTill")),
        )
        async with self._uow_factory() as uow:
            resp.media = await _render(uow, updated)
        resp.status = falcon.HTTP_200


class UserRoleResource:
    """DELETE /v1/users/{user_id}/roles/{role_id} - revoke an assignment."""

    def __init__(
        self, unit_of_work_factory: type, revoke_assignment: RevokeAssignmentUseCase
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._revoke = revoke_assignment

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str, role_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        updated = await self._revoke.execute(
            user, parse_uuid(user_id, "user id"), parse_uuid(role_id, "role id")
        )
        async with self._uow_factory() as uow:
            resp.media = await _render(uow, updated)
        resp.status = falcon.HTTP_200
