"""Access decision returned by the authorization engine."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from rolegate.domain.value_objects.scope import Scope


class DenyReason(StrEnum):
    """Why an evaluation was denied."""

    NO_EFFECTIVE_GRANT = "no_effective_grant"
    SCOPE_MISMATCH = "scope_mismatch"


@dataclass(frozen=True)
class ResourceContext:
    """Ownership facts about the resource being accessed."""

    team_id: UUID | None = None
    owner_id: UUID | None = None


@dataclass(frozen=True)
class Decision:
    """Allow(scope) or Deny(reason). Exactly one of the two is set."""

    scope: Scope | None = None
    reason: DenyReason | None = None

    @classmethod
    def allow(cls, scope: Scope) -> "Decision":
        return cls(scope=scope)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(reason=reason)

    @property
    def allowed(self) -> bool:
        return self.scope is not None

    def __bool__(self) -> bool:
        return self.allowed
