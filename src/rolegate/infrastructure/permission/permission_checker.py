"""Permission checker implementation - evaluates stored snapshots with the engine."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from rolegate.domain.entities import RoleRecord, UserRecord
from rolegate.domain.exceptions import DataIntegrityError
from rolegate.domain.services import AuthorizationEngine
from rolegate.domain.value_objects import Decision, DenyReason, ResourceContext, Scope

logger = logging.getLogger(__name__)


class RoleGatePermissionChecker:
    """Loads a user and the roles it references, then asks the engine."""

    def __init__(
        self,
        unit_of_work_factory: type,
        engine: AuthorizationEngine | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._engine = engine or AuthorizationEngine()

    async def check(
        self,
        user_id: UUID,
        permission_key: str,
        context: ResourceContext,
        as_of: datetime | None = None,
    ) -> Decision:
        """Evaluate permission_key for user_id. Unknown users get no grants."""
        snapshot = await self._load(user_id)
        if snapshot is None:
            return Decision.deny(DenyReason.NO_EFFECTIVE_GRANT)
        user, roles = snapshot
        try:
            return self._engine.evaluate(
                user, roles, permission_key, context, as_of or datetime.now(UTC)
            )
        except DataIntegrityError:
            logger.error(
                "Dangling role reference while evaluating %s for user %s",
                permission_key,
                user_id,
                exc_info=True,
            )
            raise

    async def effective_permissions(
        self, user_id: UUID, as_of: datetime | None = None
    ) -> dict[str, Scope]:
        snapshot = await self._load(user_id)
        if snapshot is None:
            return {}
        user, roles = snapshot
        try:
            return self._engine.effective_permissions(user, roles, as_of or datetime.now(UTC))
        except DataIntegrityError:
            logger.error(
                "Dangling role reference while aggregating permissions for user %s",
                user_id,
                exc_info=True,
            )
            raise

    async def _load(self, user_id: UUID) -> tuple[UserRecord, dict[UUID, RoleRecord]] | None:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if not user:
                return None
            roles = await uow.roles.get_many({a.role_id for a in user.assignments})
        return user, roles
