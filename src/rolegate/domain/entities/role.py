"""Role entity and its permission grants."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from rolegate.domain import permission_catalog
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.validity import check_window, is_effective, windows_overlap
from rolegate.domain.value_objects import Scope


@dataclass(frozen=True)
class PermissionGrant:
    """Grant - one permission key on a role, qualified by scope and window."""

    key: str
    scope: Scope = Scope.GLOBAL
    active: bool = True
    revoked: bool = False
    valid_from: datetime | None = None
    valid_till: datetime | None = None

    def __post_init__(self) -> None:
        permission_catalog.require_known(self.key)
        try:
            object.__setattr__(self, "scope", Scope(self.scope))
        except ValueError as e:
            raise ValidationError(f"Unknown scope: {self.scope}") from e
        check_window(self.valid_from, self.valid_till)

    def is_effective(self, as_of: datetime) -> bool:
        return is_effective(
            revoked=self.revoked,
            active=self.active,
            valid_from=self.valid_from,
            valid_till=self.valid_till,
            as_of=as_of,
        )


def normalize_role_name(name: str) -> str:
    """Role names are unique case-insensitively and stored upper-case."""
    normalized = (name or "").strip().upper()
    if not normalized:
        raise ValidationError("Role name is required")
    return normalized


@dataclass(frozen=True)
class RoleRecord:
    """Role - named set of grants, itself gated by is_active and a window.

    A key may appear more than once only while the live grants for it cover
    disjoint windows, so at most one is effective at any instant.
    """

    id: UUID
    name: str
    description: str = ""
    is_active: bool = True
    valid_from: datetime | None = None
    valid_till: datetime | None = None
    grants: tuple[PermissionGrant, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_role_name(self.name))
        object.__setattr__(self, "grants", tuple(self.grants))
        check_window(self.valid_from, self.valid_till)
        live = [g for g in self.grants if g.active and not g.revoked]
        for i, grant in enumerate(live):
            for other in live[i + 1 :]:
                if other.key == grant.key and windows_overlap(
                    grant.valid_from, grant.valid_till, other.valid_from, other.valid_till
                ):
                    raise ValidationError(
                        f"Duplicate grant for key {grant.key} on role {self.name}"
                    )

    def is_effective(self, as_of: datetime) -> bool:
        return is_effective(
            revoked=False,
            active=self.is_active,
            valid_from=self.valid_from,
            valid_till=self.valid_till,
            as_of=as_of,
        )

    def grant_for(self, key: str) -> PermissionGrant | None:
        """First grant stored for key."""
        for grant in self.grants:
            if grant.key == key:
                return grant
        return None

    def with_grant(self, key: str, grant: PermissionGrant | None) -> "RoleRecord":
        """Return a copy with the grants for key replaced, appended or removed.

        Replacing collapses every grant held for key into the one given, kept at
        the position of the first.
        """
        permission_catalog.require_known(key)
        if grant is not None and grant.key != key:
            raise ValidationError(f"Grant key {grant.key} does not match {key}")

        grants: list[PermissionGrant] = []
        replaced = False
        for existing in self.grants:
            if existing.key != key:
                grants.append(existing)
            elif grant is not None and not replaced:
                grants.append(grant)
                replaced = True
        if grant is not None and not replaced:
            grants.append(grant)
        return replace(self, grants=tuple(grants))
