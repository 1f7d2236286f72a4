"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from rolegate.application.ports import IdentityProvider, PermissionChecker
from rolegate.application.use_cases.audit.list_audit_logs import ListAuditLogsUseCase
from rolegate.application.use_cases.auth.authenticate import AuthenticateUseCase
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.set_role_permission import SetRolePermissionUseCase
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.application.use_cases.team.create_team import CreateTeamUseCase
from rolegate.application.use_cases.team.delete_team import DeleteTeamUseCase
from rolegate.application.use_cases.team.rename_team import RenameTeamUseCase
from rolegate.application.use_cases.user.assign_role import AssignRoleUseCase
from rolegate.application.use_cases.user.delete_user import DeleteUserUseCase
from rolegate.application.use_cases.user.list_users import ListUsersUseCase
from rolegate.application.use_cases.user.register_user import RegisterUserUseCase
from rolegate.application.use_cases.user.revoke_assignment import RevokeAssignmentUseCase
from rolegate.application.use_cases.user.update_user import UpdateUserUseCase
from rolegate.domain.exceptions import RoleGateError
from rolegate.interfaces.api.errors import handle_domain_error, handle_unexpected_error
from rolegate.interfaces.api.resources.access import (
    AccessEvaluateResource,
    MyPermissionsResource,
    PermissionCatalogResource,
)
from rolegate.interfaces.api.resources.audit_logs import AuditLogsResource
from rolegate.interfaces.api.resources.auth import LoginResource
from rolegate.interfaces.api.resources.health import HealthResource
from rolegate.interfaces.api.resources.roles import (
    PublicRolesResource,
    RolePermissionResource,
    RoleResource,
    RolesResource,
)
from rolegate.interfaces.api.resources.teams import TeamResource, TeamsResource
from rolegate.interfaces.api.resources.users import (
    UserResource,
    UserRoleResource,
    UserRolesResource,
    UsersResource,
)


def create_app(
    unit_of_work_factory: type,
    permission_checker: PermissionChecker,
    identity_provider: IdentityProvider,
    middleware: list | None = None,
) -> App:
    """Wire use cases into resources and register routes."""
    uow = unit_of_work_factory
    checker = permission_checker

    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(RoleGateError, handle_domain_error)

    app.add_route("/v1/health", HealthResource())
    app.add_route("/v1/health/ready", HealthResource(), suffix="ready")
    app.add_route("/v1/auth/login", LoginResource(AuthenticateUseCase(uow, identity_provider)))
    app.add_route("/v1/me/permissions", MyPermissionsResource(checker))
    app.add_route("/v1/access/evaluate", AccessEvaluateResource(checker))
    app.add_route("/v1/permissions/catalog", PermissionCatalogResource())

    app.add_route("/v1/roles", RolesResource(uow, checker, CreateRoleUseCase(uow, checker)))
    app.add_route("/v1/roles/public", PublicRolesResource(uow))
    app.add_route(
        "/v1/roles/{role_id}",
        RoleResource(
            uow, checker, UpdateRoleUseCase(uow, checker), DeleteRoleUseCase(uow, checker)
        ),
    )
    app.add_route(
        "/v1/roles/{role_id}/permissions/{key}",
        RolePermissionResource(SetRolePermissionUseCase(uow, checker)),
    )

    app.add_route(
        "/v1/users",
        UsersResource(uow, ListUsersUseCase(uow), RegisterUserUseCase(uow, checker)),
    )
    app.add_route(
        "/v1/users/{user_id}",
        UserResource(
            uow, checker, UpdateUserUseCase(uow, checker), DeleteUserUseCase(uow, checker)
        ),
    )
    app.add_route(
        "/v1/users/{user_id}/roles", UserRolesResource(uow, AssignRoleUseCase(uow, checker))
    )
    app.add_route(
        "/v1/users/{user_id}/roles/{role_id}",
        UserRoleResource(uow, RevokeAssignmentUseCase(uow, checker)),
    )

    app.add_route("/v1/teams", TeamsResource(uow, checker, CreateTeamUseCase(uow, checker)))
    app.add_route(
        "/v1/teams/{team_id}",
        TeamResource(RenameTeamUseCase(uow, checker), DeleteTeamUseCase(uow, checker)),
    )

    app.add_route("/v1/audit-logs", AuditLogsResource(ListAuditLogsUseCase(uow, checker)))
    return app
