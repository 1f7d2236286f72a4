"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb

from rolegate.application.dto.representations import (
    assignment_from_dict,
    assignment_to_dict,
)
from rolegate.application.ports.repositories import RowLock
from rolegate.domain.entities import UserRecord
from rolegate.domain.exceptions import DuplicateEmail
from rolegate.infrastructure.persistence.postgres.locking import lock_clause

_COLUMNS = "id, name, email, is_active, team_id, roles"


def _row_to_user(r: tuple) -> UserRecord:
    return UserRecord(
        id=r[0],
        name=r[1],
        email=r[2],
        is_active=r[3],
        team_id=r[4],
        assignments=tuple(assignment_from_dict(a) for a in r[5] or []),
    )


def _assignments_json(user: UserRecord) -> Jsonb:
    return Jsonb([assignment_to_dict(a) for a in user.assignments])


class PostgresUserRepository:
    """User repository implementation. Assignments live in one JSONB column."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID, lock: RowLock | None = None) -> UserRecord | None:
        """Get user by id, optionally locking the row."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE id = %s{lock_clause(lock)}",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_user(r)

    async def get_by_email(self, email: str) -> UserRecord | None:
        """Get user by email."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM app_user WHERE email = %s",
            (email.strip().lower(),),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_user(r)

    async def list_all(self) -> list[UserRecord]:
        """List all users."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM app_user ORDER BY name")
        rows = await cur.fetchall()
        return [_row_to_user(r) for r in rows]

    async def create(self, user: UserRecord) -> UserRecord:
        """Create user."""
        try:
            await self._conn.execute(
                f"INSERT INTO app_user ({_COLUMNS}, created_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, now())",
                (
                    user.id,
                    user.name,
                    user.email,
                    user.is_active,
                    user.team_id,
                    _assignments_json(user),
                ),
            )
        except UniqueViolation as e:
            raise DuplicateEmail(f"User with email {user.email} already exists") from e
        return user

    async def update(self, user: UserRecord) -> None:
        """Replace user profile, team and whole assignment list."""
        try:
            await self._conn.execute(
                "UPDATE app_user SET name=%s, email=%s, is_active=%s, team_id=%s, roles=%s "
                "WHERE id=%s",
                (
                    user.name,
                    user.email,
                    user.is_active,
                    user.team_id,
                    _assignments_json(user),
                    user.id,
                ),
            )
        except UniqueViolation as e:
            raise DuplicateEmail(f"User with email {user.email} already exists") from e

    async def delete(self, user_id: UUID) -> None:
        """Delete user."""
        await self._conn.execute("DELETE FROM app_user WHERE id = %s", (user_id,))

    async def any_with_live_assignment(self, role_id: UUID) -> bool:
        """True if some user holds a non-revoked assignment to role_id."""
        cur = await self._conn.execute(
            "SELECT EXISTS (SELECT 1 FROM app_user WHERE roles @> %s)",
            (Jsonb([{"role": {"id": str(role_id)}, "revoked": False}]),),
        )
        r = await cur.fetchone()
        return bool(r[0])

    async def any_in_team(self, team_id: UUID) -> bool:
        """True if some user belongs to team_id."""
        cur = await self._conn.execute(
            "SELECT EXISTS (SELECT 1 FROM app_user WHERE team_id = %s)",
            (team_id,),
        )
        r = await cur.fetchone()
        return bool(r[0])
