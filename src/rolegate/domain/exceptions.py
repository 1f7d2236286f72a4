"""Domain exceptions."""


class RoleGateError(Exception):
    """Base exception for RoleGate."""

    pass


class PermissionDenied(RoleGateError):
    """Acting user does not have permission for the requested action."""

    pass


class NotFound(RoleGateError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        self.entity = entity
        self.identifier = identifier
        message = f"{entity} not found"
        if identifier:
            message = f"{message}: {identifier}"
        super().__init__(message)


class ValidationError(RoleGateError):
    """Validation failed for input data."""

    pass


class DuplicateName(RoleGateError):
    """Role or team with the same name already exists."""

    pass


class DuplicateEmail(RoleGateError):
    """User with the same email already exists."""

    pass


class RoleInUse(RoleGateError):
    """Role is still referenced by a non-revoked role assignment."""

    pass


class TeamInUse(RoleGateError):
    """Team is still referenced by at least one user."""

    pass


class DataIntegrityError(RoleGateError):
    """A stored record references a role that does not exist.

    Fatal for the request that hit it. Retrying cannot succeed.
    """

    pass
