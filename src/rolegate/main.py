"""Application entry point and composition root."""

import logging

import uvicorn

from rolegate import __version__
from rolegate.config import get_settings
from rolegate.infrastructure.auth.keycloak_provider import KeycloakProvider
from rolegate.infrastructure.permission.permission_checker import RoleGatePermissionChecker
from rolegate.infrastructure.persistence.postgres.connection import create_pool
from rolegate.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from rolegate.interfaces.api.app import create_app
from rolegate.interfaces.api.middleware.auth import AuthMiddleware
from rolegate.interfaces.api.middleware.cors import CORSMiddleware
from rolegate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_rolegate_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(settings)
    uow_factory = create_uow_factory(pool)
    keycloak = KeycloakProvider(
        server_url=settings.keycloak_url,
        realm=settings.keycloak_realm,
        client_id=settings.keycloak_client_id,
        client_secret=settings.keycloak_client_secret,
    )
    permission_checker = RoleGatePermissionChecker(uow_factory)

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = create_app(
        uow_factory,
        permission_checker,
        identity_provider=keycloak,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(uow_factory, keycloak),
        ],
    )
    logger.info("RoleGate v%s configured for %s", __version__, settings.environment)
    return app


def main() -> None:
    """CLI entry point - run uvicorn server."""
    settings = get_settings()
    uvicorn.run(
        "rolegate.main:create_rolegate_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )
