"""Role repository port."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from rolegate.application.ports.repositories.locking import RowLock
from rolegate.domain.entities import RoleRecord


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: UUID, lock: RowLock | None = None) -> RoleRecord | None: ...

    async def get_by_name(self, name: str) -> RoleRecord | None: ...

    async def get_many(self, role_ids: Iterable[UUID]) -> dict[UUID, RoleRecord]: ...

    async def list_all(self) -> list[RoleRecord]: ...

    async def create(self, role: RoleRecord) -> RoleRecord: ...

    async def update(self, role: RoleRecord) -> None: ...

    async def delete(self, role_id: UUID) -> None: ...
