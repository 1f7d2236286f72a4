"""Roles API resources."""

import falcon.asgi

from rolegate.application.dto.representations import (
    grant_from_dict,
    grant_spec_from_dict,
    parse_instant,
    parse_uuid,
    role_to_dict,
)
from rolegate.application.ports import PermissionChecker
from rolegate.application.use_cases.common import authorize
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.set_role_permission import SetRolePermissionUseCase
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.domain.exceptions import NotFound
from rolegate.interfaces.api.resources.common import read_object, require_user


class RolesResource:
    """GET/POST /v1/roles - list and create roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List all roles."""
        user = require_user(req, resp)
        if not user:
            return
        await authorize(self._permission_checker, user, "role.read")

        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        resp.media = {"roles": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create role with initial permissions."""
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        role = await self._create.execute(
            user,
            name=str(body.get("name") or ""),
            description=str(body.get("description") or ""),
            initial_grants=[grant_from_dict(g) for g in body.get("permissions") or []],
            valid_from=parse_instant(body.get("validFrom")),
            valid_till=parse_instant(body.get("validTill")),
        )
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PATCH/DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._update = update_role
        self._delete = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        await authorize(self._permission_checker, user, "role.read")

        rid = parse_uuid(role_id, "role id")
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(rid)
        if not role:
            raise NotFound("Role", role_id)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Update description, activation or validity window."""
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        changes = {}
        if "description" in body:
            changes["description"] = str(body["description"] or "")
        if "isActive" in body:
            changes["is_active"] = bool(body["isActive"])
        if "validFrom" in body:
            changes["valid_from"] = parse_instant(body["validFrom"])
        if "validTill" in body:
            changes["valid_till"] = parse_instant(body["validTill"])

        role = await self._update.execute(user, parse_uuid(role_id, "role id"), **changes)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return
        await self._delete.execute(user, parse_uuid(role_id, "role id"))
        resp.status = falcon.HTTP_204


class RolePermissionResource:
    """PUT/DELETE /v1/roles/{role_id}/permissions/{key} - upsert or remove a grant."""

    def __init__(self, set_role_permission: SetRolePermissionUseCase) -> None:
        self._set = set_role_permission

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str, key: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        spec = grant_spec_from_dict(await read_object(req))
        role = await self._set.execute(user, parse_uuid(role_id, "role id"), key, spec)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str, key: str
    ) -> None:
        user = require_user(req, resp)
        if not user:
            return

        role = await self._set.execute(user, parse_uuid(role_id, "role id"), key, None)
        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200


class PublicRolesResource:
    """GET /v1/roles/public - id and name of active roles, no login required.

    Feeds the role picker of the registration form; grants are not exposed.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        resp.media = {
            "roles": [{"id": str(r.id), "name": r.name} for r in roles if r.is_active]
        }
        resp.status = falcon.HTTP_200
