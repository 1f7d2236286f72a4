"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from rolegate.application.ports.repositories.audit_log_repository import (
    AuditLogRepository,
)
from rolegate.application.ports.repositories.role_repository import RoleRepository
from rolegate.application.ports.repositories.team_repository import TeamRepository
from rolegate.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def users(self) -> UserRepository: ...

    @property
    def teams(self) -> TeamRepository: ...

    @property
    def audit_logs(self) -> AuditLogRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
