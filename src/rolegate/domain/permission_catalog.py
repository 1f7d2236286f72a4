"""Static registry of known permission keys."""

from dataclasses import dataclass

from rolegate.domain.exceptions import ValidationError


@dataclass(frozen=True)
class CatalogEntry:
    """One known permission key."""

    key: str
    label: str
    category: str


CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("user.create", "Create Users", "User Management"),
    CatalogEntry("user.read", "View Users", "User Management"),
    CatalogEntry("user.update", "Update Users", "User Management"),
    CatalogEntry("user.delete", "Delete Users", "User Management"),
    CatalogEntry("role.create", "Create Roles", "Role Management"),
    CatalogEntry("role.read", "View Roles", "Role Management"),
    CatalogEntry("role.update", "Update Roles", "Role Management"),
    CatalogEntry("role.delete", "Delete Roles", "Role Management"),
    CatalogEntry("team.create", "Create Teams", "Team Management"),
    CatalogEntry("team.read", "View Teams", "Team Management"),
    CatalogEntry("team.update", "Update Teams", "Team Management"),
    CatalogEntry("team.delete", "Delete Teams", "Team Management"),
    CatalogEntry("audit.read", "View Audit Logs", "Audit"),
)

_BY_KEY = {entry.key: entry for entry in CATALOG}


def keys() -> list[str]:
    """All known keys in declaration order."""
    return [entry.key for entry in CATALOG]


def is_known(key: str) -> bool:
    return key in _BY_KEY


def require_known(key: str) -> str:
    """Return key unchanged, or raise ValidationError for an unknown key."""
    if not key:
        raise ValidationError("Permission key is required")
    if key not in _BY_KEY:
        raise ValidationError(f"Unknown permission key: {key}")
    return key


def grouped() -> dict[str, list[CatalogEntry]]:
    """Entries grouped by category, categories in declaration order."""
    groups: dict[str, list[CatalogEntry]] = {}
    for entry in CATALOG:
        groups.setdefault(entry.category, []).append(entry)
    return groups
