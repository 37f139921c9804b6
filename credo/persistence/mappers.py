"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from credo.domain.model import AuthEvent, Session, User
from credo.domain.value import (
    AuthAction,
    AuthEventId,
    AuthStatus,
    Email,
    SessionId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=Email(row["email"]),
        password_hash=row.get("password_hash"),
        is_verified=row["is_verified"],
        verification_code=row.get("verification_code"),
        verification_expires=_aware(row.get("verification_expires")),
        google_id=row.get("google_id"),
        microsoft_id=row.get("microsoft_id"),
        amazon_id=row.get("amazon_id"),
        idme_id=row.get("idme_id"),
        display_name=row.get("display_name"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        avatar_url=row.get("avatar_url"),
        idme_affiliation=row.get("idme_affiliation"),
        created_at=_aware(row["created_at"]),
        last_login=_aware(row.get("last_login")),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    # Email dumps to its normalized string
    return user.model_dump()


def row_to_auth_event(row: Dict[str, Any]) -> AuthEvent:
    """Convert database row to AuthEvent domain model."""
    return AuthEvent(
        id=AuthEventId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])) if row.get("user_id") else None,
        action=AuthAction(row["action"]),
        status=AuthStatus(row["status"]),
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        timestamp=_aware(row["timestamp"]),
    )


def auth_event_to_dict(event: AuthEvent) -> Dict[str, Any]:
    """Convert AuthEvent domain model to database dict."""
    return {
        "id": event.id,
        "user_id": event.user_id,
        "action": event.action.value,
        "status": event.status.value,
        "ip_address": event.ip_address,
        "user_agent": event.user_agent,
        "timestamp": event.timestamp,
    }


def row_to_session(row: Dict[str, Any]) -> Session:
    """Convert database row to Session domain model."""
    return Session(
        id=SessionId(row["id"]),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=_aware(row["created_at"]),
        expires_at=_aware(row["expires_at"]),
    )


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Convert Session domain model to database dict."""
    return session.model_dump()
