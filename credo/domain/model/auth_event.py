"""Authentication audit event.

Append-only record of every auth-relevant action; never updated.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from credo.domain.model.common import DomainModel
from credo.domain.model.user import utcnow
from credo.domain.value import AuthAction, AuthEventId, AuthStatus, UserId


class AuthEvent(DomainModel):
    """Single audit log row."""

    id: AuthEventId
    user_id: Optional[UserId] = None  # None when the user could not be identified
    action: AuthAction
    status: AuthStatus
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)
