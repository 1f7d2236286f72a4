"""PostgreSQL role repository implementation."""

from collections.abc import Iterable
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb

from rolegate.application.dto.representations import grant_from_dict, grant_to_dict
from rolegate.application.ports.repositories import RowLock
from rolegate.domain.entities import RoleRecord
from rolegate.domain.exceptions import DuplicateName
from rolegate.infrastructure.persistence.postgres.locking import lock_clause

_COLUMNS = "id, name, description, is_active, valid_from, valid_till, permissions"


def _row_to_role(r: tuple) -> RoleRecord:
    return RoleRecord(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        is_active=r[3],
        valid_from=r[4],
        valid_till=r[5],
        grants=tuple(grant_from_dict(g) for g in r[6] or []),
    )


class PostgresRoleRepository:
    """Role repository implementation. Grants live in one JSONB column."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID, lock: RowLock | None = None) -> RoleRecord | None:
        """Get role by id, optionally locking the row."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s{lock_clause(lock)}",
            (role_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_role(r)

    async def get_by_name(self, name: str) -> RoleRecord | None:
        """Get role by normalized name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE name = %s",
            (name.strip().upper(),),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_role(r)

    async def get_many(self, role_ids: Iterable[UUID]) -> dict[UUID, RoleRecord]:
        """Get roles by ids; missing ids are simply absent from the result."""
        ids = list(role_ids)
        if not ids:
            return {}
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = ANY(%s)",
            (ids,),
        )
        rows = await cur.fetchall()
        return {r[0]: _row_to_role(r) for r in rows}

    async def list_all(self) -> list[RoleRecord]:
        """List all roles."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role ORDER BY name")
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def create(self, role: RoleRecord) -> RoleRecord:
        """Create role."""
        try:
            await self._conn.execute(
                f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.name,
                    role.description,
                    role.is_active,
                    role.valid_from,
                    role.valid_till,
                    Jsonb([grant_to_dict(g) for g in role.grants]),
                ),
            )
        except UniqueViolation as e:
            raise DuplicateName(f"Role {role.name} already exists") from e
        return role

    async def update(self, role: RoleRecord) -> None:
        """Replace role attributes and its whole grant list."""
        await self._conn.execute(
            "UPDATE role SET description=%s, is_active=%s, valid_from=%s, valid_till=%s, "
            "permissions=%s WHERE id=%s",
            (
                role.description,
                role.is_active,
                role.valid_from,
                role.valid_till,
                Jsonb([grant_to_dict(g) for g in role.grants]),
                role.id,
            ),
        )

    async def delete(self, role_id: UUID) -> None:
        """Delete role."""
        await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))
