"""Authentication status use case."""

from pydantic import BaseModel

from credo.application.usecase.base import BaseUseCase
from credo.domain.service import SessionService


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    session_id: str | None = None  # Session cookie, if present


class CurrentUser(BaseModel):
    """Current user information for response."""

    id: str
    email: str
    display_name: str | None
    is_verified: bool


class GetCurrentUserResponse(BaseModel):
    """Authentication status response."""

    authenticated: bool
    user: CurrentUser | None = None


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for reporting who, if anyone, the session belongs to."""

    def __init__(self, session_service: SessionService) -> None:
        """Initialize get current user use case.

        Args:
            session_service: Session domain service
        """
        self.session_service = session_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Resolve the session handle.

        Missing, unknown and expired handles all report unauthenticated.
        """
        view = await self.session_service.current_user(request.session_id)
        if view is None:
            return GetCurrentUserResponse(authenticated=False)

        return GetCurrentUserResponse(
            authenticated=True,
            user=CurrentUser(
                id=str(view.id),
                email=view.email,
                display_name=view.display_name,
                is_verified=view.is_verified,
            ),
        )
