"""Application ports - interfaces for external adapters."""

from rolegate.application.ports.identity_provider import IdentityProvider
from rolegate.application.ports.permission_checker import PermissionChecker
from rolegate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "IdentityProvider",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
