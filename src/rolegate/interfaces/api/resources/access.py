"""Access evaluation API resources."""

import falcon.asgi

from rolegate.application.dto.representations import (
    decision_to_dict,
    parse_instant,
    parse_optional_uuid,
)
from rolegate.application.ports import PermissionChecker
from rolegate.domain import permission_catalog
from rolegate.domain.value_objects import ResourceContext, Scope
from rolegate.interfaces.api.resources.common import read_object, require_user


class AccessEvaluateResource:
    """POST /v1/access/evaluate - decision for the calling user."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        body = await read_object(req)
        key = permission_catalog.require_known(str(body.get("permission") or ""))
        context = ResourceContext(
            team_id=parse_optional_uuid(body.get("teamId"), "teamId"),
            owner_id=parse_optional_uuid(body.get("ownerId"), "ownerId"),
        )
        decision = await self._permission_checker.check(
            user.user_id, key, context, as_of=parse_instant(body.get("asOf"))
        )
        resp.media = decision_to_dict(decision)
        resp.status = falcon.HTTP_200


class MyPermissionsResource:
    """GET /v1/me/permissions - effective permission set of the calling user."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        permissions = await self._permission_checker.effective_permissions(user.user_id)
        resp.media = {
            "userId": str(user.user_id),
            "permissions": {key: scope.value for key, scope in sorted(permissions.items())},
        }
        resp.status = falcon.HTTP_200


class PermissionCatalogResource:
    """GET /v1/permissions/catalog - known permission keys by category."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {
            "categories": [
                {
                    "name": category,
                    "permissions": [{"key": e.key, "label": e.label} for e in entries],
                }
                for category, entries in permission_catalog.grouped().items()
            ],
            "scopes": [s.value for s in Scope],
        }
        resp.status = falcon.HTTP_200
