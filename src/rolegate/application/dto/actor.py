"""Acting identity threaded into every use case."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Actor:
    """The authenticated user on whose behalf a command runs."""

    user_id: UUID
    email: str | None = None
