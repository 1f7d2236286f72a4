"""Keycloak OIDC provider for login and JWT validation."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    email: str | None
    username: str | None


class KeycloakProvider:
    """Keycloak OIDC - password grant for login, introspection for requests."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def authenticate(self, username: str, password: str) -> str | None:
        """Exchange credentials for an access token, or None if rejected."""
        try:
            token = self._keycloak.token(username, password)
        except KeycloakError as e:
            logger.info("Keycloak rejected credentials for %s: %s", username, e)
            return None
        return token.get("access_token")

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect JWT, return user info or None if inactive or invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.info("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return OIDCUser(
            user_id=token_info.get("sub", ""),
            email=token_info.get("email"),
            username=token_info.get("preferred_username"),
        )
