"""Identity provider port - owns credentials and issues tokens."""

from typing import Protocol


class IdentityProvider(Protocol):
    """Port for verifying credentials against the identity store."""

    def authenticate(self, username: str, password: str) -> str | None: ...
