"""Unit tests for domain exceptions."""

import pytest

from rolegate.domain.exceptions import (
    DataIntegrityError,
    DuplicateEmail,
    DuplicateName,
    NotFound,
    PermissionDenied,
    RoleGateError,
    RoleInUse,
    TeamInUse,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc",
    [
        PermissionDenied,
        NotFound,
        ValidationError,
        DuplicateName,
        DuplicateEmail,
        RoleInUse,
        TeamInUse,
        DataIntegrityError,
    ],
)
def test_inherits_rolegate_error(exc) -> None:
    assert issubclass(exc, RoleGateError)


def test_not_found_message_names_entity_and_id() -> None:
    err = NotFound("Role", "123")
    assert str(err) == "Role not found: 123"
    assert err.entity == "Role"
    assert err.identifier == "123"


def test_not_found_without_identifier() -> None:
    assert str(NotFound("Team")) == "Team not found"


def test_raise_team_in_use_catchable_as_rolegate_error() -> None:
    with pytest.raises(RoleGateError):
        raise TeamInUse("Team Alpha still has members")


def test_exception_message_preserved() -> None:
    msg = "User does not have role.create permission"
    with pytest.raises(PermissionDenied, match=msg):
        raise PermissionDenied(msg)
