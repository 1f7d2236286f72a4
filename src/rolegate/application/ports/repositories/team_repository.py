"""Team repository port."""

from typing import Protocol
from uuid import UUID

from rolegate.application.ports.repositories.locking import RowLock
from rolegate.domain.entities import TeamRecord


class TeamRepository(Protocol):
    """Port for team persistence."""

    async def get_by_id(self, team_id: UUID, lock: RowLock | None = None) -> TeamRecord | None: ...

    async def get_by_name(self, name: str) -> TeamRecord | None: ...

    async def list_all(self) -> list[TeamRecord]: ...

    async def create(self, team: TeamRecord) -> TeamRecord: ...

    async def update(self, team: TeamRecord) -> None: ...

    async def delete(self, team_id: UUID) -> None: ...
