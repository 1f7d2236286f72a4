"""List audit logs use case."""

from rolegate.application.dto.actor import Actor
from rolegate.application.ports import PermissionChecker
from rolegate.application.use_cases.common import authorize
from rolegate.domain.entities import AuditLogEntry
from rolegate.domain.value_objects import AuditAction, AuditEntity


class ListAuditLogsUseCase:
    """Read back recorded audit facts, newest first."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        actor: Actor,
        action: AuditAction | None = None,
        entity: AuditEntity | None = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        await authorize(self._permission_checker, actor, "audit.read")
        limit = min(max(limit, 1), 500)
        async with self._uow_factory() as uow:
            return await uow.audit_logs.list(action=action, entity=entity, limit=limit)
