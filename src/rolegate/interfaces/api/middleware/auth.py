"""Auth middleware - resolves the bearer token to the acting local user."""

import logging

import falcon.asgi

from rolegate.application.dto.actor import Actor

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Middleware that validates the JWT and sets req.context.user to an Actor.

    req.context.user is None for anonymous requests, invalid tokens, and tokens
    whose email has no active local user.
    """

    def __init__(self, unit_of_work_factory: type, keycloak_provider=None) -> None:
        self._uow_factory = unit_of_work_factory
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return

        oidc_user = self._keycloak.decode_token(auth[7:])
        if not oidc_user:
            return
        email = oidc_user.email or oidc_user.username
        if not email:
            logger.warning("Token for subject %s carries no email", oidc_user.user_id)
            return

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)
        if not user or not user.is_active:
            return
        req.context.user = Actor(user_id=user.id, email=user.email)
