"""Authenticate use case - login against the identity provider."""

import logging

from rolegate.application.dto.actor import Actor
from rolegate.application.dto.auth_result import AuthenticationResult
from rolegate.application.ports import IdentityProvider
from rolegate.application.use_cases.common import audit_fact
from rolegate.domain.entities.user import normalize_email
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.value_objects import AuditAction, AuditEntity

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """Verify credentials, resolve the local user and record the login."""

    def __init__(
        self,
        unit_of_work_factory: type,
        identity_provider: IdentityProvider,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._identity_provider = identity_provider

    async def execute(self, email: str, password: str) -> AuthenticationResult:
        """Never raises for bad credentials; returns success=False with a message."""
        try:
            email = normalize_email(email)
        except ValidationError as e:
            return AuthenticationResult(success=False, message=str(e))
        if not password:
            return AuthenticationResult(success=False, message="Password is required")

        token = self._identity_provider.authenticate(email, password)
        if not token:
            logger.info("Failed login for %s", email)
            return AuthenticationResult(success=False, message="Invalid email or password")

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)
            if not user:
                logger.warning("Identity provider accepted unknown user %s", email)
                return AuthenticationResult(success=False, message="Invalid email or password")
            if not user.is_active:
                return AuthenticationResult(success=False, message="Account is deactivated")
            actor = Actor(user_id=user.id, email=user.email)
            await uow.audit_logs.record(
                audit_fact(actor, AuditAction.LOGIN, AuditEntity.USER, user.id)
            )

        return AuthenticationResult(success=True, token=token, user=user)
