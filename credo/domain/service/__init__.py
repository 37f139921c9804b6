"""Domain services."""

from .audit_service import AuditLogService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_service import IdentityService
from .mail_sender import MailSender
from .session_service import SessionService, UserView
from .verification_service import VerificationService

__all__ = [
    "AuditLogService",
    "AuthService",
    "IdentityService",
    "MailSender",
    "OAuthClient",
    "Service",
    "SessionService",
    "UserView",
    "VerificationService",
]
