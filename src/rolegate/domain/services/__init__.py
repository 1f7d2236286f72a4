"""Domain services."""

from rolegate.domain.services.authorization import AuthorizationEngine

__all__ = ["AuthorizationEngine"]
