"""Domain layer DI providers."""

from dishka import Scope, provide

from credo.config import AuthSettings
from credo.domain.repository import (
    AuthEventRepository,
    SessionRepository,
    UserRepository,
)
from credo.domain.service import (
    AuditLogService,
    AuthService,
    IdentityService,
    MailSender,
    OAuthClient,
    SessionService,
    VerificationService,
)
from credo.domain.value import AuthProvider
from credo.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider OAuth domain service.

        Args:
            oauth_clients: Clients of the enabled providers

        Returns:
            AuthService configured with every enabled provider
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_verification_service(
        self,
        user_repository: UserRepository,
        mail_sender: MailSender,
        auth_settings: AuthSettings,
    ) -> VerificationService:
        """Provide verification code domain service."""
        return VerificationService(
            user_repository=user_repository,
            mail_sender=mail_sender,
            auth_settings=auth_settings,
        )

    @provide
    def get_identity_service(
        self,
        user_repository: UserRepository,
        verification_service: VerificationService,
        auth_settings: AuthSettings,
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            user_repository=user_repository,
            verification_service=verification_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_session_service(
        self,
        session_repository: SessionRepository,
        user_repository: UserRepository,
        auth_settings: AuthSettings,
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            session_repository=session_repository,
            user_repository=user_repository,
            auth_settings=auth_settings,
        )

    @provide
    def get_audit_log_service(
        self, auth_event_repository: AuthEventRepository
    ) -> AuditLogService:
        """Provide audit log domain service."""
        return AuditLogService(auth_event_repository=auth_event_repository)
