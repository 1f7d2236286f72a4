"""Wire representations of roles, users, audit facts and decisions.

Keys are camelCase as consumed by the dashboard. Instants are ISO-8601 strings
or null; naive instants are taken as UTC.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from rolegate.application.dto.auth_result import AuthenticationResult
from rolegate.application.dto.grant_spec import GrantSpec
from rolegate.domain.entities import (
    AuditLogEntry,
    PermissionGrant,
    RoleAssignment,
    RoleRecord,
    TeamRecord,
    UserRecord,
)
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.value_objects import Decision, Scope


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO-8601 instant; None and empty string mean unset."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, str):
        try:
            instant = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValidationError(f"Invalid date: {value}") from e
    else:
        raise ValidationError(f"Invalid date: {value!r}")
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant


def format_instant(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def parse_uuid(value: Any, field: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field}: {value!r}") from e


def parse_optional_uuid(value: Any, field: str) -> UUID | None:
    if value is None or value == "":
        return None
    return parse_uuid(value, field)


def parse_scope(value: Any) -> Scope:
    if value is None:
        return Scope.GLOBAL
    try:
        return Scope(value)
    except ValueError as e:
        raise ValidationError(f"Unknown scope: {value}") from e


def _require(data: Mapping[str, Any], key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValidationError("Expected a JSON object")
    try:
        return data[key]
    except KeyError as e:
        raise ValidationError(f"Missing required field: {key}") from e


# --- Grants and roles ---


def grant_to_dict(grant: PermissionGrant) -> dict[str, Any]:
    return {
        "key": grant.key,
        "scope": grant.scope.value,
        "isActive": grant.active,
        "revoked": grant.revoked,
        "validFrom": format_instant(grant.valid_from),
        "validTill": format_instant(grant.valid_till),
    }


def grant_from_dict(data: Mapping[str, Any]) -> PermissionGrant:
    return PermissionGrant(
        key=_require(data, "key"),
        scope=parse_scope(data.get("scope")),
        active=bool(data.get("isActive", True)),
        revoked=bool(data.get("revoked", False)),
        valid_from=parse_instant(data.get("validFrom")),
        valid_till=parse_instant(data.get("validTill")),
    )


def grant_spec_from_dict(data: Mapping[str, Any]) -> GrantSpec:
    if not isinstance(data, Mapping):
        raise ValidationError("Expected a JSON object")
    return GrantSpec(
        scope=parse_scope(data.get("scope")),
        valid_from=parse_instant(data.get("validFrom")),
        valid_till=parse_instant(data.get("validTill")),
    )


def role_to_dict(role: RoleRecord) -> dict[str, Any]:
    return {
        "id": str(role.id),
        "name": role.name,
        "description": role.description,
        "isActive": role.is_active,
        "validFrom": format_instant(role.valid_from),
        "validTill": format_instant(role.valid_till),
        "permissions": [grant_to_dict(g) for g in role.grants],
    }


def role_from_dict(data: Mapping[str, Any]) -> RoleRecord:
    return RoleRecord(
        id=parse_uuid(_require(data, "id"), "role id"),
        name=_require(data, "name"),
        description=data.get("description") or "",
        is_active=bool(data.get("isActive", True)),
        valid_from=parse_instant(data.get("validFrom")),
        valid_till=parse_instant(data.get("validTill")),
        grants=tuple(grant_from_dict(g) for g in data.get("permissions") or []),
    )


# --- Assignments, users and teams ---


def assignment_to_dict(
    assignment: RoleAssignment, role: RoleRecord | None = None
) -> dict[str, Any]:
    ref: dict[str, Any] = {"id": str(assignment.role_id)}
    if role is not None:
        ref["name"] = role.name
    return {
        "role": ref,
        "revoked": assignment.revoked,
        "validFrom": format_instant(assignment.valid_from),
        "validTill": format_instant(assignment.valid_till),
    }


def assignment_from_dict(data: Mapping[str, Any]) -> RoleAssignment:
    ref = _require(data, "role")
    role_id = ref.get("id") if isinstance(ref, Mapping) else ref
    return RoleAssignment(
        role_id=parse_uuid(role_id, "role id"),
        revoked=bool(data.get("revoked", False)),
        valid_from=parse_instant(data.get("validFrom")),
        valid_till=parse_instant(data.get("validTill")),
    )


def team_to_dict(team: TeamRecord) -> dict[str, Any]:
    return {
        "id": str(team.id),
        "name": team.name,
        "createdAt": format_instant(team.created_at),
    }


def user_to_dict(
    user: UserRecord,
    team: TeamRecord | None = None,
    roles: Mapping[UUID, RoleRecord] | None = None,
) -> dict[str, Any]:
    """Serialize a user; team and role names are filled in when supplied."""
    roles = roles or {}
    if team is not None:
        team_ref: dict[str, Any] | None = {"id": str(team.id), "name": team.name}
    elif user.team_id is not None:
        team_ref = {"id": str(user.team_id), "name": None}
    else:
        team_ref = None
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "isActive": user.is_active,
        "team": team_ref,
        "roles": [assignment_to_dict(a, roles.get(a.role_id)) for a in user.assignments],
    }


def user_from_dict(data: Mapping[str, Any]) -> UserRecord:
    user_id = parse_uuid(_require(data, "id"), "user id")
    team = data.get("team")
    team_id = team.get("id") if isinstance(team, Mapping) else team
    return UserRecord(
        id=user_id,
        name=_require(data, "name"),
        email=_require(data, "email"),
        is_active=bool(data.get("isActive", True)),
        team_id=parse_optional_uuid(team_id, "team id"),
        assignments=tuple(assignment_from_dict(a) for a in data.get("roles") or []),
    )


# --- Audit, auth, decisions ---


def audit_entry_to_dict(entry: AuditLogEntry) -> dict[str, Any]:
    return {
        "id": str(entry.id),
        "user": {"name": entry.user_name, "email": entry.user_email},
        "action": entry.action.value,
        "entity": entry.entity.value,
        "entityId": str(entry.entity_id),
        "createdAt": format_instant(entry.created_at),
    }


def auth_result_to_dict(result: AuthenticationResult) -> dict[str, Any]:
    body: dict[str, Any] = {"success": result.success}
    if result.token is not None:
        body["token"] = result.token
    if result.user is not None:
        body["user"] = user_to_dict(result.user)
    if result.message is not None:
        body["message"] = result.message
    return body


def decision_to_dict(decision: Decision) -> dict[str, Any]:
    return {
        "allowed": decision.allowed,
        "scope": decision.scope.value if decision.scope else None,
        "reason": decision.reason.value if decision.reason else None,
    }
