"""User repository port."""

from typing import Protocol
from uuid import UUID

from rolegate.application.ports.repositories.locking import RowLock
from rolegate.domain.entities import UserRecord


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_id(self, user_id: UUID, lock: RowLock | None = None) -> UserRecord | None: ...

    async def get_by_email(self, email: str) -> UserRecord | None: ...

    async def list_all(self) -> list[UserRecord]: ...

    async def create(self, user: UserRecord) -> UserRecord: ...

    async def update(self, user: UserRecord) -> None: ...

    async def delete(self, user_id: UUID) -> None: ...

    async def any_with_live_assignment(self, role_id: UUID) -> bool: ...

    async def any_in_team(self, team_id: UUID) -> bool: ...
