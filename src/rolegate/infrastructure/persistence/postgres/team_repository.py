"""PostgreSQL team repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from rolegate.application.ports.repositories import RowLock
from rolegate.domain.entities import TeamRecord
from rolegate.domain.exceptions import DuplicateName
from rolegate.infrastructure.persistence.postgres.locking import lock_clause


class PostgresTeamRepository:
    """Team repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, team_id: UUID, lock: RowLock | None = None) -> TeamRecord | None:
        """Get team by id, optionally locking the row."""
        cur = await self._conn.execute(
            f"SELECT id, name, created_at FROM team WHERE id = %s{lock_clause(lock)}",
            (team_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return TeamRecord(id=r[0], name=r[1], created_at=r[2])

    async def get_by_name(self, name: str) -> TeamRecord | None:
        """Get team by name."""
        cur = await self._conn.execute(
            "SELECT id, name, created_at FROM team WHERE name = %s",
            (name.strip(),),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return TeamRecord(id=r[0], name=r[1], created_at=r[2])

    async def list_all(self) -> list[TeamRecord]:
        """List all teams."""
        cur = await self._conn.execute("SELECT id, name, created_at FROM team ORDER BY name")
        rows = await cur.fetchall()
        return [TeamRecord(id=r[0], name=r[1], created_at=r[2]) for r in rows]

    async def create(self, team: TeamRecord) -> TeamRecord:
        """Create team."""
        try:
            await self._conn.execute(
                "INSERT INTO team (id, name, created_at) VALUES (%s, %s, %s)",
                (team.id, team.name, team.created_at),
            )
        except UniqueViolation as e:
            raise DuplicateName(f"Team {team.name} already exists") from e
        return team

    async def update(self, team: TeamRecord) -> None:
        """Update team."""
        try:
            await self._conn.execute(
                "UPDATE team SET name=%s WHERE id=%s",
                (team.name, team.id),
            )
        except UniqueViolation as e:
            raise DuplicateName(f"Team {team.name} already exists") from e

    async def delete(self, team_id: UUID) -> None:
        """Delete team."""
        await self._conn.execute("DELETE FROM team WHERE id = %s", (team_id,))
