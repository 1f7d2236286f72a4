"""Permission checker port - RBAC authorization of the acting user."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from rolegate.domain.value_objects import Decision, ResourceContext, Scope


class PermissionChecker(Protocol):
    """Port for evaluating the acting user's permissions against stored snapshots."""

    async def check(
        self,
        user_id: UUID,
        permission_key: str,
        context: ResourceContext,
        as_of: datetime | None = None,
    ) -> Decision: ...

    async def effective_permissions(
        self, user_id: UUID, as_of: datetime | None = None
    ) -> dict[str, Scope]: ...
