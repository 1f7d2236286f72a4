"""Unit tests for the validity primitive."""

from datetime import timedelta

import pytest

from rolegate.domain.exceptions import ValidationError
from rolegate.domain.validity import check_window, is_effective

from tests.conftest import NOW, TOMORROW, YESTERDAY


def _effective(**overrides) -> bool:
    kwargs = dict(revoked=False, active=True, valid_from=None, valid_till=None, as_of=NOW)
    kwargs.update(overrides)
    return is_effective(**kwargs)


def test_unbounded_active_is_effective() -> None:
    assert _effective() is True


def test_revoked_is_never_effective() -> None:
    assert _effective(revoked=True) is False


def test_inactive_is_never_effective() -> None:
    assert _effective(active=False) is False


def test_before_valid_from_is_not_effective() -> None:
    assert _effective(valid_from=TOMORROW) is False


def test_after_valid_till_is_not_effective() -> None:
    assert _effective(valid_till=YESTERDAY) is False


def test_bounds_are_inclusive() -> None:
    assert _effective(valid_from=NOW, valid_till=NOW) is True


def test_inside_window_is_effective() -> None:
    assert _effective(valid_from=YESTERDAY, valid_till=TOMORROW) is True


def test_one_microsecond_past_till_is_not_effective() -> None:
    assert _effective(valid_till=NOW - timedelta(microseconds=1)) is False


def test_check_window_rejects_inverted_bounds() -> None:
    with pytest.raises(ValidationError, match="validFrom"):
        check_window(TOMORROW, YESTERDAY)


def test_check_window_accepts_open_bounds() -> None:
    check_window(None, YESTERDAY)
    check_window(TOMORROW, None)
    check_window(None, None)
