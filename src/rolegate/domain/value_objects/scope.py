"""Grant scopes for RBAC."""

from enum import StrEnum


class Scope(StrEnum):
    """Breadth of a permission grant."""

    GLOBAL = "global"
    TEAM = "team"
    SELF = "self"

    @property
    def breadth(self) -> int:
        """Rank used for precedence: global > team > self."""
        return _BREADTH[self]


_BREADTH = {Scope.SELF: 0, Scope.TEAM: 1, Scope.GLOBAL: 2}
