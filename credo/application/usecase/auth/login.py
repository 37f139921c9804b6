"""Local (email and password) login use case."""

from pydantic import BaseModel

from credo.application.usecase.base import (
    BaseUseCase,
    audit_status,
    parse_email,
    user_id_of,
)
from credo.domain.error import DomainError
from credo.domain.service import AuditLogService, IdentityService, SessionService
from credo.domain.value import AuthAction, AuthStatus, RequestContext


class LoginRequest(BaseModel):
    """Login request."""

    email: str
    password: str
    context: RequestContext = RequestContext()


class LoginUser(BaseModel):
    """Logged-in user summary."""

    id: str
    email: str


class LoginResponse(BaseModel):
    """Login response.

    ``session_id`` is set as a cookie by the route, never sent in a body.
    """

    session_id: str
    user: LoginUser
    message: str = "Login successful"


class LoginUseCase(BaseUseCase):
    """Use case for password login."""

    def __init__(
        self,
        identity_service: IdentityService,
        session_service: SessionService,
        audit_log_service: AuditLogService,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity domain service
            session_service: Session domain service
            audit_log_service: Audit log domain service
        """
        self.identity_service = identity_service
        self.session_service = session_service
        self.audit_log_service = audit_log_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Authenticate and open a session.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            NotVerifiedError: Email not verified yet
        """
        try:
            email = parse_email(request.email)
            user = await self.identity_service.authenticate_local(
                email, request.password
            )
        except DomainError as e:
            await self.audit_log_service.record(
                user_id_of(e), AuthAction.LOGIN, audit_status(e), request.context
            )
            raise

        session_id = await self.session_service.login(user)
        await self.audit_log_service.record(
            user.id, AuthAction.LOGIN, AuthStatus.SUCCESS, request.context
        )
        return LoginResponse(
            session_id=session_id,
            user=LoginUser(id=str(user.id), email=user.email.root),
        )
