"""Validity window resolution shared by grants, assignments and roles."""

from datetime import datetime

from rolegate.domain.exceptions import ValidationError


def is_effective(
    *,
    revoked: bool,
    active: bool,
    valid_from: datetime | None,
    valid_till: datetime | None,
    as_of: datetime,
) -> bool:
    """Return True when not revoked, active and as_of lies inside the window.

    Both bounds are inclusive; an unset bound is open.
    """
    if revoked or not active:
        return False
    if valid_from is not None and as_of < valid_from:
        return False
    if valid_till is not None and as_of > valid_till:
        return False
    return True


def check_window(valid_from: datetime | None, valid_till: datetime | None) -> None:
    """Raise ValidationError if the window bounds are out of order."""
    if valid_from is not None and valid_till is not None and valid_from > valid_till:
        raise ValidationError("validFrom must not be after validTill")


def windows_overlap(
    a_from: datetime | None,
    a_till: datetime | None,
    b_from: datetime | None,
    b_till: datetime | None,
) -> bool:
    """True if two inclusive windows share at least one instant."""
    if a_from is not None and b_till is not None and a_from > b_till:
        return False
    if b_from is not None and a_till is not None and b_from > a_till:
        return False
    return True
