"""User entity and its role assignments."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID

from rolegate.domain.exceptions import ValidationError
from rolegate.domain.validity import check_window, is_effective


@dataclass(frozen=True)
class RoleAssignment:
    """Binding of a role to a user - revocable and time-bounded on its own."""

    role_id: UUID
    revoked: bool = False
    valid_from: datetime | None = None
    valid_till: datetime | None = None

    def __post_init__(self) -> None:
        check_window(self.valid_from, self.valid_till)

    def is_effective(self, as_of: datetime) -> bool:
        # Assignments have no active flag of their own.
        return is_effective(
            revoked=self.revoked,
            active=True,
            valid_from=self.valid_from,
            valid_till=self.valid_till,
            as_of=as_of,
        )


def normalize_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not normalized or "@" not in normalized:
        raise ValidationError("A valid email is required")
    return normalized


@dataclass(frozen=True)
class UserRecord:
    """User - identity, optional team and role assignments."""

    id: UUID
    name: str
    email: str
    is_active: bool = True
    team_id: UUID | None = None
    assignments: tuple[RoleAssignment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not (self.name or "").strip():
            raise ValidationError("User name is required")
        object.__setattr__(self, "email", normalize_email(self.email))
        object.__setattr__(self, "assignments", tuple(self.assignments))

    def holds_live_assignment(self, role_id: UUID) -> bool:
        """True if any non-revoked assignment references role_id, in window or not."""
        return any(a.role_id == role_id and not a.revoked for a in self.assignments)

    def with_assignment(self, assignment: RoleAssignment) -> "UserRecord":
        """Return a copy holding assignment; a live one for the same role is replaced."""
        assignments: list[RoleAssignment] = []
        replaced = False
        for existing in self.assignments:
            if existing.role_id == assignment.role_id and not existing.revoked and not replaced:
                assignments.append(assignment)
                replaced = True
            else:
                assignments.append(existing)
        if not replaced:
            assignments.append(assignment)
        return replace(self, assignments=tuple(assignments))

    def revoke_role(self, role_id: UUID) -> "UserRecord":
        """Return a copy with every live assignment to role_id marked revoked."""
        return replace(
            self,
            assignments=tuple(
                replace(a, revoked=True) if a.role_id == role_id else a
                for a in self.assignments
            ),
        )
