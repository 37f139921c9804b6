"""Logout use case."""

from pydantic import BaseModel

from credo.application.usecase.base import BaseUseCase
from credo.domain.service import AuditLogService, SessionService
from credo.domain.value import AuthAction, AuthStatus, RequestContext


class LogoutRequest(BaseModel):
    """Logout request. An absent handle is a valid, anonymous logout."""

    session_id: str | None = None
    context: RequestContext = RequestContext()


class LogoutResponse(BaseModel):
    """Logout response."""

    message: str = "Logout successful"


class LogoutUseCase(BaseUseCase):
    """Use case for ending a session."""

    def __init__(
        self,
        session_service: SessionService,
        audit_log_service: AuditLogService,
    ) -> None:
        self.session_service = session_service
        self.audit_log_service = audit_log_service

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        """End the session if there is one. Never fails."""
        user_id = await self.session_service.logout(request.session_id)
        if user_id:
            await self.audit_log_service.record(
                user_id, AuthAction.LOGOUT, AuthStatus.SUCCESS, request.context
            )
        return LogoutResponse()
