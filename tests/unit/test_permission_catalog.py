"""Unit tests for the permission catalog."""

import pytest

from rolegate.domain import permission_catalog
from rolegate.domain.exceptions import ValidationError


def test_catalog_has_thirteen_keys() -> None:
    assert len(permission_catalog.keys()) == 13
    assert "audit.read" in permission_catalog.keys()


def test_grouped_keeps_category_order() -> None:
    groups = permission_catalog.grouped()
    assert list(groups) == ["User Management", "Role Management", "Team Management", "Audit"]
    assert [e.key for e in groups["Audit"]] == ["audit.read"]


def test_require_known_returns_key() -> None:
    assert permission_catalog.require_known("role.update") == "role.update"


def test_require_known_rejects_unknown_key() -> None:
    with pytest.raises(ValidationError, match="Unknown permission key"):
        permission_catalog.require_known("billing.read")


def test_require_known_rejects_empty_key() -> None:
    with pytest.raises(ValidationError, match="required"):
        permission_catalog.require_known("")


def test_is_known() -> None:
    assert permission_catalog.is_known("team.delete")
    assert not permission_catalog.is_known("team.archive")
