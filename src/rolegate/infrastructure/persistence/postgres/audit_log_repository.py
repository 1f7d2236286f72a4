"""PostgreSQL audit log repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from rolegate.domain.entities import AuditFact, AuditLogEntry
from rolegate.domain.value_objects import AuditAction, AuditEntity


class PostgresAuditLogRepository:
    """Audit log repository implementation - append-only."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def record(self, fact: AuditFact) -> None:
        """Append audit fact."""
        await self._conn.execute(
            "INSERT INTO audit_log (id, actor_id, action, entity, entity_id, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                fact.id,
                fact.actor_id,
                fact.action.value,
                fact.entity.value,
                fact.entity_id,
                fact.at,
            ),
        )

    async def list(
        self,
        *,
        action: AuditAction | None = None,
        entity: AuditEntity | None = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        """List audit facts with actor name and email, newest first."""
        clauses = []
        params: list = []
        if action:
            clauses.append("a.action = %s")
            params.append(action.value)
        if entity:
            clauses.append("a.entity = %s")
            params.append(entity.value)
        where = f"WHERE {' AND '.join(clauses)} " if clauses else ""
        params.append(limit)
        cur = await self._conn.execute(
            "SELECT a.id, u.name, u.email, a.action, a.entity, a.entity_id, a.created_at "
            "FROM audit_log a LEFT JOIN app_user u ON u.id = a.actor_id "
            f"{where}ORDER BY a.created_at DESC LIMIT %s",
            params,
        )
        rows = await cur.fetchall()
        return [
            AuditLogEntry(
                id=r[0],
                user_name=r[1],
                user_email=r[2],
                action=AuditAction(r[3]),
                entity=AuditEntity(r[4]),
                entity_id=r[5],
                created_at=r[6],
            )
            for r in rows
        ]

    async def has_actor(self, user_id: UUID) -> bool:
        """True if user_id acted in any recorded fact."""
        cur = await self._conn.execute(
            "SELECT EXISTS (SELECT 1 FROM audit_log WHERE actor_id = %s)",
            (user_id,),
        )
        r = await cur.fetchone()
        return bool(r[0])
