"""Authentication result DTO."""

from dataclasses import dataclass

from rolegate.domain.entities import UserRecord


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of a login attempt, consumed by session bootstrap."""

    success: bool
    token: str | None = None
    user: UserRecord | None = None
    message: str | None = None
