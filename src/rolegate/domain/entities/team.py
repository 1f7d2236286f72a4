"""Team entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from rolegate.domain.exceptions import ValidationError


def normalize_team_name(name: str) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("Team name is required")
    return normalized


@dataclass(frozen=True)
class TeamRecord:
    """Team - referenced by users for team-scoped grants."""

    id: UUID
    name: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_team_name(self.name))
