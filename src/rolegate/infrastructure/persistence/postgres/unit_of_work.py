"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from rolegate.infrastructure.persistence.postgres.audit_log_repository import (
    PostgresAuditLogRepository,
)
from rolegate.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from rolegate.infrastructure.persistence.postgres.team_repository import (
    PostgresTeamRepository,
)
from rolegate.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction.

    Row locks taken by repositories are held until commit or rollback.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._roles = PostgresRoleRepository(self._conn)
        self._users = PostgresUserRepository(self._conn)
        self._teams = PostgresTeamRepository(self._conn)
        self._audit_logs = PostgresAuditLogRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def teams(self) -> PostgresTeamRepository:
        return self._teams

    @property
    def audit_logs(self) -> PostgresAuditLogRepository:
        return self._audit_logs

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager) committing on clean exit."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
