"""Application layer DI providers."""

from dishka import Scope, provide

from credo.application.usecase.auth import (
    CompleteOAuthLoginUseCase,
    GetCurrentUserUseCase,
    InitiateOAuthLoginUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
    ResendCodeUseCase,
    VerifyEmailUseCase,
)
from credo.config import AuthSettings
from credo.domain.service import (
    AuditLogService,
    AuthService,
    IdentityService,
    SessionService,
    VerificationService,
)
from credo.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_register_use_case(
        self,
        identity_service: IdentityService,
        audit_log_service: AuditLogService,
        auth_settings: AuthSettings,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            identity_service=identity_service,
            audit_log_service=audit_log_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_verify_email_use_case(
        self,
        verification_service: VerificationService,
        audit_log_service: AuditLogService,
    ) -> VerifyEmailUseCase:
        """Provide verify email use case."""
        return VerifyEmailUseCase(
            verification_service=verification_service,
            audit_log_service=audit_log_service,
        )

    @provide
    def get_resend_code_use_case(
        self,
        verification_service: VerificationService,
        audit_log_service: AuditLogService,
    ) -> ResendCodeUseCase:
        """Provide resend code use case."""
        return ResendCodeUseCase(
            verification_service=verification_service,
            audit_log_service=audit_log_service,
        )

    @provide
    def get_login_use_case(
        self,
        identity_service: IdentityService,
        session_service: SessionService,
        audit_log_service: AuditLogService,
    ) -> LoginUseCase:
        """Provide local login use case."""
        return LoginUseCase(
            identity_service=identity_service,
            session_service=session_service,
            audit_log_service=audit_log_service,
        )

    @provide
    def get_initiate_oauth_login_use_case(
        self, auth_service: AuthService
    ) -> InitiateOAuthLoginUseCase:
        """Provide OAuth redirect use case."""
        return InitiateOAuthLoginUseCase(auth_service=auth_service)

    @provide
    def get_complete_oauth_login_use_case(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        session_service: SessionService,
        audit_log_service: AuditLogService,
    ) -> CompleteOAuthLoginUseCase:
        """Provide OAuth callback use case."""
        return CompleteOAuthLoginUseCase(
            auth_service=auth_service,
            identity_service=identity_service,
            session_service=session_service,
            audit_log_service=audit_log_service,
        )

    @provide
    def get_logout_use_case(
        self,
        session_service: SessionService,
        audit_log_service: AuditLogService,
    ) -> LogoutUseCase:
        """Provide logout use case."""
        return LogoutUseCase(
            session_service=session_service,
            audit_log_service=audit_log_service,
        )

    @provide
    def get_current_user_use_case(
        self, session_service: SessionService
    ) -> GetCurrentUserUseCase:
        """Provide authentication status use case."""
        return GetCurrentUserUseCase(session_service=session_service)
