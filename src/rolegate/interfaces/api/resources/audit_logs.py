"""Audit log API resource."""

import falcon.asgi

from rolegate.application.dto.representations import audit_entry_to_dict
from rolegate.application.use_cases.audit.list_audit_logs import ListAuditLogsUseCase
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.value_objects import AuditAction, AuditEntity
from rolegate.interfaces.api.resources.common import require_user


class AuditLogsResource:
    """GET /v1/audit-logs?action=&entity=&limit= - newest first."""

    def __init__(self, list_audit_logs: ListAuditLogsUseCase) -> None:
        self._list = list_audit_logs

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = require_user(req, resp)
        if not user:
            return

        try:
            action = AuditAction(req.get_param("action")) if req.get_param("action") else None
            entity = AuditEntity(req.get_param("entity")) if req.get_param("entity") else None
        except ValueError as e:
            raise ValidationError(str(e)) from e
        limit = req.get_param_as_int("limit") or 100

        entries = await self._list.execute(user, action=action, entity=entity, limit=limit)
        resp.media = {"logs": [audit_entry_to_dict(e) for e in entries]}
        resp.status = falcon.HTTP_200
