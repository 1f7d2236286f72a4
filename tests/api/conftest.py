"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from rolegate.application.dto.actor import Actor
from rolegate.infrastructure.permission.permission_checker import RoleGatePermissionChecker
from rolegate.interfaces.api.app import create_app


class FakeIdentityProvider:
    """Accepts admin@example.com / secret only."""

    def authenticate(self, username: str, password: str) -> str | None:
        if username == "admin@example.com" and password == "secret":
            return "test-token"
        return None


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing."""

    def __init__(self, actor: Actor | None) -> None:
        self._actor = actor

    async def process_request(self, req, resp):
        req.context.user = self._actor


def _client(uow_factory, actor: Actor | None) -> TestClient:
    app = create_app(
        uow_factory,
        RoleGatePermissionChecker(uow_factory),
        FakeIdentityProvider(),
        middleware=[AuthBypassMiddleware(actor)],
    )
    return TestClient(app)


@pytest.fixture
def client(uow_factory, admin_actor) -> TestClient:
    """Client acting as the stored superadmin."""
    return _client(uow_factory, admin_actor)


@pytest.fixture
def anonymous_client(uow_factory) -> TestClient:
    """Client without an authenticated user."""
    return _client(uow_factory, None)


@pytest.fixture
def client_as(uow_factory):
    """Build a client acting as the given stored user."""

    def _build(user) -> TestClient:
        return _client(uow_factory, Actor(user_id=user.id, email=user.email))

    return _build
