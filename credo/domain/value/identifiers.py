"""Strongly typed identifiers for domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
AuthEventId = NewType("AuthEventId", UUID)

# Opaque, URL-safe random string handed to the client in a cookie
SessionId = NewType("SessionId", str)
