"""Register use case."""

import logfire
from pydantic import BaseModel

from credo.adapter.error import AdapterError
from credo.application.usecase.base import (
    BaseUseCase,
    as_domain_error,
    audit_status,
    parse_email,
    user_id_of,
)
from credo.config import AuthSettings
from credo.domain.error import DomainError, ValidationError
from credo.domain.service import AuditLogService, IdentityService
from credo.domain.value import AuthAction, AuthStatus, RequestContext


class RegisterRequest(BaseModel):
    """Register request.

    Fields arrive unvalidated so that rejected input is audited too.
    """

    email: str
    password: str
    context: RequestContext = RequestContext()


class RegisterResponse(BaseModel):
    """Register response."""

    user_id: str
    email: str
    message: str = (
        "Registration successful. Please check your email for verification code."
    )


class RegisterUseCase(BaseUseCase):
    """Use case for creating a local account."""

    def __init__(
        self,
        identity_service: IdentityService,
        audit_log_service: AuditLogService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize register use case.

        Args:
            identity_service: Identity domain service
            audit_log_service: Audit log domain service
            auth_settings: Authentication settings (password rules)
        """
        self.identity_service = identity_service
        self.audit_log_service = audit_log_service
        self.auth_settings = auth_settings

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Validate input, create the user and send the verification code.

        Args:
            request: Email, password and client context

        Returns:
            The new user's id and normalized email

        Raises:
            ValidationError: Malformed email or short password
            AlreadyExistsError: Email already registered
            DependencyFailureError: Verification mail could not be sent
        """
        try:
            email = parse_email(request.email)
            if len(request.password) < self.auth_settings.min_password_length:
                raise ValidationError(
                    "Password must be at least "
                    f"{self.auth_settings.min_password_length} characters"
                )
            user = await self.identity_service.register(email, request.password)
        except DomainError as e:
            await self.audit_log_service.record(
                user_id_of(e), AuthAction.REGISTER, audit_status(e), request.context
            )
            raise
        except AdapterError as e:
            logfire.error("Registration failed in adapter", error=str(e))
            await self.audit_log_service.record(
                None, AuthAction.REGISTER, audit_status(e), request.context
            )
            raise as_domain_error(e) from e

        await self.audit_log_service.record(
            user.id, AuthAction.REGISTER, AuthStatus.SUCCESS, request.context
        )
        return RegisterResponse(user_id=str(user.id), email=user.email.root)
