"""Authentication audit log service."""

from uuid import uuid4

import logfire

from credo.domain.model.auth_event import AuthEvent
from credo.domain.repository import AuthEventRepository
from credo.domain.value import (
    AuthAction,
    AuthEventId,
    AuthStatus,
    RequestContext,
    UserId,
)

from .base import Service


class AuditLogService(Service):
    """Fire-and-forget recorder for auth events.

    Recording never raises: a failed write is logged and dropped so the
    operation being audited is unaffected.
    """

    def __init__(self, auth_event_repository: AuthEventRepository) -> None:
        """Initialize audit log service.

        Args:
            auth_event_repository: Event store
        """
        self.auth_event_repository = auth_event_repository

    async def record(
        self,
        user_id: UserId | None,
        action: AuthAction,
        status: AuthStatus,
        context: RequestContext,
    ) -> None:
        """Append an audit event.

        Args:
            user_id: Acting user, None if unknown
            action: What was attempted
            status: How it ended
            context: Client IP and user agent
        """
        event = AuthEvent(
            id=AuthEventId(uuid4()),
            user_id=user_id,
            action=action,
            status=status,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
        )
        try:
            await self.auth_event_repository.add(event)
        except Exception as e:
            logfire.error(
                "Failed to record auth event",
                action=action.value,
                status=status.value,
                error=str(e),
            )

    async def list_for_user(self, user_id: UserId) -> list[AuthEvent]:
        """Get a user's audit trail, oldest first."""
        return await self.auth_event_repository.find_all_by_user_id(user_id)
