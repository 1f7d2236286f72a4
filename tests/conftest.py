"""Pytest fixtures for RoleGate tests."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from rolegate.application.dto.actor import Actor
from rolegate.application.ports.repositories import RowLock
from rolegate.domain.entities import (
    AuditFact,
    AuditLogEntry,
    PermissionGrant,
    RoleAssignment,
    RoleRecord,
    TeamRecord,
    UserRecord,
)
from rolegate.domain.value_objects import (
    AuditAction,
    AuditEntity,
    Decision,
    Scope,
)
from rolegate.domain import permission_catalog


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
YESTERDAY = NOW - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, RoleRecord] = {}
        self.locks: list[tuple[UUID, RowLock | None]] = []

    async def get_by_id(self, role_id: UUID, lock: RowLock | None = None) -> RoleRecord | None:
        self.locks.append((role_id, lock))
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> RoleRecord | None:
        for role in self._by_id.values():
            if role.name == name.strip().upper():
                return role
        return None

    async def get_many(self, role_ids: Iterable[UUID]) -> dict[UUID, RoleRecord]:
        return {rid: self._by_id[rid] for rid in role_ids if rid in self._by_id}

    async def list_all(self) -> list[RoleRecord]:
        return sorted(self._by_id.values(), key=lambda r: r.name)

    async def create(self, role: RoleRecord) -> RoleRecord:
        self._by_id[role.id] = role
        return role

    async def update(self, role: RoleRecord) -> None:
        self._by_id[role.id] = role

    async def delete(self, role_id: UUID) -> None:
        self._by_id.pop(role_id, None)

    def add_role(self, role: RoleRecord) -> RoleRecord:
        """Helper to add role for tests."""
        self._by_id[role.id] = role
        return role


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, UserRecord] = {}

    async def get_by_id(self, user_id: UUID, lock: RowLock | None = None) -> UserRecord | None:
        return self._by_id.get(user_id)

    async def get_by_email(self, email: str) -> UserRecord | None:
        for user in self._by_id.values():
            if user.email == email.strip().lower():
                return user
        return None

    async def list_all(self) -> list[UserRecord]:
        return sorted(self._by_id.values(), key=lambda u: u.name)

    async def create(self, user: UserRecord) -> UserRecord:
        self._by_id[user.id] = user
        return user

    async def update(self, user: UserRecord) -> None:
        self._by_id[user.id] = user

    async def delete(self, user_id: UUID) -> None:
        self._by_id.pop(user_id, None)

    async def any_with_live_assignment(self, role_id: UUID) -> bool:
        return any(u.holds_live_assignment(role_id) for u in self._by_id.values())

    async def any_in_team(self, team_id: UUID) -> bool:
        return any(u.team_id == team_id for u in self._by_id.values())

    def add_user(self, user: UserRecord) -> UserRecord:
        """Helper to add user for tests."""
        self._by_id[user.id] = user
        return user


class FakeTeamRepository:
    """In-memory team repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, TeamRecord] = {}

    async def get_by_id(self, team_id: UUID, lock: RowLock | None = None) -> TeamRecord | None:
        return self._by_id.get(team_id)

    async def get_by_name(self, name: str) -> TeamRecord | None:
        for team in self._by_id.values():
            if team.name == name.strip():
                return team
        return None

    async def list_all(self) -> list[TeamRecord]:
        return sorted(self._by_id.values(), key=lambda t: t.name)

    async def create(self, team: TeamRecord) -> TeamRecord:
        self._by_id[team.id] = team
        return team

    async def update(self, team: TeamRecord) -> None:
        self._by_id[team.id] = team

    async def delete(self, team_id: UUID) -> None:
        self._by_id.pop(team_id, None)

    def add_team(self, team: TeamRecord) -> TeamRecord:
        """Helper to add team for tests."""
        self._by_id[team.id] = team
        return team


class FakeAuditLogRepository:
    """In-memory audit recorder."""

    def __init__(self, users: FakeUserRepository) -> None:
        self.facts: list[AuditFact] = []
        self._users = users

    async def record(self, fact: AuditFact) -> None:
        self.facts.append(fact)

    async def list(
        self,
        *,
        action: AuditAction | None = None,
        entity: AuditEntity | None = None,
        limit: int = 100,
    ) -> list[AuditLogEntry]:
        entries = []
        for fact in reversed(self.facts):
            if action and fact.action != action:
                continue
            if entity and fact.entity != entity:
                continue
            actor = self._users._by_id.get(fact.actor_id)
            entries.append(
                AuditLogEntry(
                    id=fact.id,
                    user_name=actor.name if actor else None,
                    user_email=actor.email if actor else None,
                    action=fact.action,
                    entity=fact.entity,
                    entity_id=fact.entity_id,
                    created_at=fact.at,
                )
            )
        return entries[:limit]

    async def has_actor(self, user_id: UUID) -> bool:
        return any(f.actor_id == user_id for f in self.facts)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository()
        self.teams = FakeTeamRepository()
        self.audit_logs = FakeAuditLogRepository(self.users)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def shared_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory():
        yield uow

    return _factory


# --- Builders ---


def make_role(name: str, *grants: PermissionGrant, **kwargs) -> RoleRecord:
    return RoleRecord(id=uuid4(), name=name, grants=grants, **kwargs)


def make_user(
    *roles: RoleRecord,
    team_id: UUID | None = None,
    name: str = "Jane Doe",
    email: str | None = None,
) -> UserRecord:
    return UserRecord(
        id=uuid4(),
        name=name,
        email=email or f"{uuid4().hex[:8]}@example.com",
        team_id=team_id,
        assignments=tuple(RoleAssignment(role_id=r.id) for r in roles),
    )


def superadmin_role() -> RoleRecord:
    return make_role(
        "SUPERADMIN",
        *(PermissionGrant(key=k, scope=Scope.GLOBAL) for k in permission_catalog.keys()),
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return shared_factory(fake_uow)


@pytest.fixture
def admin(fake_uow: FakeUnitOfWork) -> UserRecord:
    """Stored superadmin user."""
    role = fake_uow.roles.add_role(superadmin_role())
    return fake_uow.users.add_user(make_user(role, name="Admin", email="admin@example.com"))


@pytest.fixture
def admin_actor(admin: UserRecord) -> Actor:
    return Actor(user_id=admin.id, email=admin.email)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - allows globally by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = Decision.allow(Scope.GLOBAL)
    mock.effective_permissions.return_value = {
        key: Scope.GLOBAL for key in permission_catalog.keys()
    }
    return mock
