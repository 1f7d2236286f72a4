"""Authorization engine - pure evaluation of grants over role and user snapshots.

The engine never reads a clock and never performs I/O. Callers load a user
snapshot plus every role it references and pass the instant to evaluate at.
"""

from collections.abc import Iterator, Mapping
from datetime import datetime
from uuid import UUID

from rolegate.domain.entities import PermissionGrant, RoleRecord, UserRecord
from rolegate.domain.exceptions import DataIntegrityError
from rolegate.domain.value_objects import Decision, DenyReason, ResourceContext, Scope


class AuthorizationEngine:
    """Answers whether a user may use a permission on a resource at an instant."""

    def evaluate(
        self,
        user: UserRecord,
        role_lookup: Mapping[UUID, RoleRecord],
        permission_key: str,
        context: ResourceContext,
        as_of: datetime,
    ) -> Decision:
        """Evaluate one permission key for user against the resource context.

        Raises DataIntegrityError if an effective assignment references a role
        missing from role_lookup. Lack of access is a Deny decision, not an error.
        """
        scopes = {
            grant.scope
            for grant in self._effective_grants(user, role_lookup, as_of)
            if grant.key == permission_key
        }
        if not scopes:
            return Decision.deny(DenyReason.NO_EFFECTIVE_GRANT)

        # Broadest applicable scope wins; narrower grants never block a broader one.
        if Scope.GLOBAL in scopes:
            return Decision.allow(Scope.GLOBAL)
        if (
            Scope.TEAM in scopes
            and context.team_id is not None
            and context.team_id == user.team_id
        ):
            return Decision.allow(Scope.TEAM)
        if (
            Scope.SELF in scopes
            and context.owner_id is not None
            and context.owner_id == user.id
        ):
            return Decision.allow(Scope.SELF)
        return Decision.deny(DenyReason.SCOPE_MISMATCH)

    def effective_permissions(
        self,
        user: UserRecord,
        role_lookup: Mapping[UUID, RoleRecord],
        as_of: datetime,
    ) -> dict[str, Scope]:
        """Map each permission key the user effectively holds to its broadest scope."""
        result: dict[str, Scope] = {}
        for grant in self._effective_grants(user, role_lookup, as_of):
            held = result.get(grant.key)
            if held is None or grant.scope.breadth > held.breadth:
                result[grant.key] = grant.scope
        return result

    def _effective_grants(
        self,
        user: UserRecord,
        role_lookup: Mapping[UUID, RoleRecord],
        as_of: datetime,
    ) -> Iterator[PermissionGrant]:
        for assignment in user.assignments:
            if not assignment.is_effective(as_of):
                continue
            role = role_lookup.get(assignment.role_id)
            if role is None:
                raise DataIntegrityError(
                    f"User {user.id} is assigned unknown role {assignment.role_id}"
                )
            # Role-level activation and window gate every grant beneath it.
            if not role.is_effective(as_of):
                continue
            for grant in role.grants:
                if grant.is_effective(as_of):
                    yield grant
