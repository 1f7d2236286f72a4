"""Unit tests for the authorization engine."""

from uuid import uuid4

import pytest

from rolegate.domain.entities import PermissionGrant, RoleAssignment, UserRecord
from rolegate.domain.exceptions import DataIntegrityError
from rolegate.domain.services import AuthorizationEngine
from rolegate.domain.value_objects import Decision, DenyReason, ResourceContext, Scope

from tests.conftest import NOW, TOMORROW, YESTERDAY, make_role, make_user

T1 = uuid4()
T2 = uuid4()


@pytest.fixture
def engine() -> AuthorizationEngine:
    return AuthorizationEngine()


def _lookup(*roles):
    return {r.id: r for r in roles}


def _editor():
    return make_role("EDITOR", PermissionGrant(key="user.update", scope=Scope.TEAM))


def _superadmin():
    return make_role("SUPERADMIN", PermissionGrant(key="user.update", scope=Scope.GLOBAL))


# --- Scenarios ---


def test_team_grant_allows_own_team(engine) -> None:
    editor = _editor()
    user = make_user(editor, team_id=T1)
    decision = engine.evaluate(user, _lookup(editor), "user.update", ResourceContext(team_id=T1), NOW)
    assert decision == Decision.allow(Scope.TEAM)


def test_team_grant_denies_other_team(engine) -> None:
    editor = _editor()
    user = make_user(editor, team_id=T1)
    decision = engine.evaluate(user, _lookup(editor), "user.update", ResourceContext(team_id=T2), NOW)
    assert decision == Decision.deny(DenyReason.SCOPE_MISMATCH)


def test_expired_assignment_gives_no_effective_grant(engine) -> None:
    editor = _editor()
    user = UserRecord(
        id=uuid4(),
        name="U",
        email="u@example.com",
        team_id=T1,
        assignments=(RoleAssignment(role_id=editor.id, valid_till=YESTERDAY),),
    )
    decision = engine.evaluate(user, _lookup(editor), "user.update", ResourceContext(team_id=T1), NOW)
    assert decision == Decision.deny(DenyReason.NO_EFFECTIVE_GRANT)


def test_global_grant_wins_over_team_grant(engine) -> None:
    editor, superadmin = _editor(), _superadmin()
    user = make_user(editor, superadmin, team_id=T1)
    decision = engine.evaluate(
        user, _lookup(editor, superadmin), "user.update", ResourceContext(team_id=T2), NOW
    )
    assert decision == Decision.allow(Scope.GLOBAL)


# --- Properties ---


@pytest.mark.parametrize(
    "context",
    [
        ResourceContext(),
        ResourceContext(team_id=uuid4()),
        ResourceContext(owner_id=uuid4()),
        ResourceContext(team_id=uuid4(), owner_id=uuid4()),
    ],
)
def test_global_grant_ignores_context(engine, context) -> None:
    role = _superadmin()
    user = make_user(role)
    assert engine.evaluate(user, _lookup(role), "user.update", context, NOW) == Decision.allow(
        Scope.GLOBAL
    )


def test_team_grant_requires_user_team(engine) -> None:
    editor = _editor()
    user = make_user(editor, team_id=None)
    decision = engine.evaluate(user, _lookup(editor), "user.update", ResourceContext(team_id=None), NOW)
    assert decision.reason is DenyReason.SCOPE_MISMATCH


def test_self_grant_allows_owner_only(engine) -> None:
    role = make_role("MEMBER", PermissionGrant(key="user.update", scope=Scope.SELF))
    user = make_user(role)
    assert engine.evaluate(
        user, _lookup(role), "user.update", ResourceContext(owner_id=user.id), NOW
    ) == Decision.allow(Scope.SELF)
    assert engine.evaluate(
        user, _lookup(role), "user.update", ResourceContext(owner_id=uuid4()), NOW
    ) == Decision.deny(DenyReason.SCOPE_MISMATCH)


def test_team_mismatch_falls_through_to_self(engine) -> None:
    team_role = _editor()
    self_role = make_role("MEMBER", PermissionGrant(key="user.update", scope=Scope.SELF))
    user = make_user(team_role, self_role, team_id=T1)
    decision = engine.evaluate(
        user,
        _lookup(team_role, self_role),
        "user.update",
        ResourceContext(team_id=T2, owner_id=user.id),
        NOW,
    )
    assert decision == Decision.allow(Scope.SELF)


def test_revoked_assignment_contributes_nothing(engine) -> None:
    role = _superadmin()
    user = UserRecord(
        id=uuid4(),
        name="U",
        email="u@example.com",
        assignments=(RoleAssignment(role_id=role.id, revoked=True),),
    )
    decision = engine.evaluate(user, _lookup(role), "user.update", ResourceContext(), NOW)
    assert decision.reason is DenyReason.NO_EFFECTIVE_GRANT


def test_future_assignment_contributes_nothing(engine) -> None:
    role = _superadmin()
    user = UserRecord(
        id=uuid4(),
        name="U",
        email="u@example.com",
        assignments=(RoleAssignment(role_id=role.id, valid_from=TOMORROW),),
    )
    assert not engine.evaluate(user, _lookup(role), "user.update", ResourceContext(), NOW)


@pytest.mark.parametrize(
    "grant",
    [
        PermissionGrant(key="user.update", valid_from=TOMORROW),
        PermissionGrant(key="user.update", valid_till=YESTERDAY),
        PermissionGrant(key="user.update", revoked=True),
        PermissionGrant(key="user.update", active=False),
    ],
)
def test_ineffective_grant_contributes_nothing(engine, grant) -> None:
    role = make_role("R", grant)
    user = make_user(role)
    decision = engine.evaluate(user, _lookup(role), "user.update", ResourceContext(), NOW)
    assert decision == Decision.deny(DenyReason.NO_EFFECTIVE_GRANT)


def test_inactive_role_gates_its_grants(engine) -> None:
    role = make_role("R", PermissionGrant(key="user.update"), is_active=False)
    user = make_user(role)
    assert not engine.evaluate(user, _lookup(role), "user.update", ResourceContext(), NOW)


def test_role_window_gates_its_grants(engine) -> None:
    role = make_role("R", PermissionGrant(key="user.update"), valid_till=YESTERDAY)
    user = make_user(role)
    assert not engine.evaluate(user, _lookup(role), "user.update", ResourceContext(), NOW)


def test_other_keys_do_not_match(engine) -> None:
    role = make_role("R", PermissionGrant(key="user.read"))
    user = make_user(role)
    decision = engine.evaluate(user, _lookup(role), "user.update", ResourceContext(), NOW)
    assert decision.reason is DenyReason.NO_EFFECTIVE_GRANT


def test_user_without_assignments_is_denied(engine) -> None:
    user = make_user()
    decision = engine.evaluate(user, {}, "audit.read", ResourceContext(), NOW)
    assert decision == Decision.deny(DenyReason.NO_EFFECTIVE_GRANT)


def test_evaluation_is_deterministic(engine) -> None:
    editor, superadmin = _editor(), _superadmin()
    user = make_user(editor, superadmin, team_id=T1)
    lookup = _lookup(editor, superadmin)
    context = ResourceContext(team_id=T1)
    results = {engine.evaluate(user, lookup, "user.update", context, NOW) for _ in range(5)}
    assert len(results) == 1


def test_dangling_role_reference_raises(engine) -> None:
    role = _editor()
    user = make_user(role)
    with pytest.raises(DataIntegrityError, match=str(role.id)):
        engine.evaluate(user, {}, "user.update", ResourceContext(), NOW)


def test_dangling_reference_on_revoked_assignment_is_ignored(engine) -> None:
    user = UserRecord(
        id=uuid4(),
        name="U",
        email="u@example.com",
        assignments=(RoleAssignment(role_id=uuid4(), revoked=True),),
    )
    decision = engine.evaluate(user, {}, "user.update", ResourceContext(), NOW)
    assert decision.reason is DenyReason.NO_EFFECTIVE_GRANT


def test_decision_truthiness() -> None:
    assert Decision.allow(Scope.TEAM)
    assert not Decision.deny(DenyReason.SCOPE_MISMATCH)
    assert Decision.allow(Scope.TEAM).reason is None


# --- Effective permission aggregation ---


def test_effective_permissions_keeps_broadest_scope(engine) -> None:
    editor = make_role(
        "EDITOR",
        PermissionGrant(key="user.update", scope=Scope.TEAM),
        PermissionGrant(key="user.read", scope=Scope.SELF),
    )
    superadmin = _superadmin()
    user = make_user(editor, superadmin)
    perms = engine.effective_permissions(user, _lookup(editor, superadmin), NOW)
    assert perms == {"user.update": Scope.GLOBAL, "user.read": Scope.SELF}


def test_effective_permissions_skips_ineffective_sources(engine) -> None:
    active = make_role("A", PermissionGrant(key="team.read", scope=Scope.TEAM))
    expired = make_role("B", PermissionGrant(key="audit.read"), valid_till=YESTERDAY)
    user = make_user(active, expired)
    assert engine.effective_permissions(user, _lookup(active, expired), NOW) == {
        "team.read": Scope.TEAM
    }


def test_effective_permissions_dangling_reference_raises(engine) -> None:
    user = make_user(_editor())
    with pytest.raises(DataIntegrityError):
        engine.effective_permissions(user, {}, NOW)


def test_repeated_key_uses_grant_effective_at_instant(engine) -> None:
    role = make_role(
        "SEASONAL",
        PermissionGrant(key="user.update", scope=Scope.TEAM, valid_till=YESTERDAY),
        PermissionGrant(key="user.update", scope=Scope.GLOBAL, valid_from=NOW),
    )
    user = make_user(role, team_id=T1)
    lookup = _lookup(role)
    context = ResourceContext(team_id=T2)

    assert engine.evaluate(user, lookup, "user.update", context, YESTERDAY) == Decision.deny(
        DenyReason.SCOPE_MISMATCH
    )
    assert engine.evaluate(user, lookup, "user.update", context, TOMORROW) == Decision.allow(
        Scope.GLOBAL
    )
