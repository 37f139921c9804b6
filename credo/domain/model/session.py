"""Server-side session.

A session stores only the user id; everything else is looked up on use.
"""

from datetime import datetime

from pydantic import Field

from credo.domain.model.common import DomainModel
from credo.domain.model.user import utcnow
from credo.domain.value import SessionId, UserId


class Session(DomainModel):
    """Authenticated session bound to an opaque handle."""

    id: SessionId
    user_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
