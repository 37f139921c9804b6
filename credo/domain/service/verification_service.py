"""Email verification code domain service."""

import secrets
from datetime import datetime, timedelta
from typing import Callable

import logfire

from credo.config import AuthSettings
from credo.domain.error import (
    AlreadyVerifiedError,
    CodeExpiredError,
    InvalidCodeError,
    NotFoundError,
)
from credo.domain.model.user import User, utcnow
from credo.domain.repository import UserRepository
from credo.domain.value import Email

from .base import Service
from .mail_sender import MailSender

CODE_LENGTH = 6

VERIFICATION_SUBJECT = "Verify Your Email"


def generate_code() -> str:
    """Return a uniformly random 6-digit code, leading zeros preserved."""
    return f"{secrets.randbelow(10**CODE_LENGTH):0{CODE_LENGTH}d}"


class VerificationService(Service):
    """Issues, stores and checks one-time email verification codes.

    A user has at most one live code: issuing overwrites the previous one.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        mail_sender: MailSender,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize verification service.

        Args:
            user_repository: User repository
            mail_sender: Delivers the code to the user
            auth_settings: Authentication settings (code lifetime)
            clock: Source of the current time
        """
        self.user_repository = user_repository
        self.mail_sender = mail_sender
        self.auth_settings = auth_settings
        self.clock = clock

    @property
    def code_ttl(self) -> timedelta:
        return timedelta(hours=self.auth_settings.verification_code_ttl_hours)

    async def issue(self, user: User) -> User:
        """Generate a code, store it on the user and mail it.

        Args:
            user: User to issue the code for

        Returns:
            The updated user

        Raises:
            MailDeliveryError: If the code could not be sent
        """
        with logfire.span("verification_service.issue", user_id=str(user.id)):
            code = generate_code()
            updated = user.model_copy(
                update={
                    "verification_code": code,
                    "verification_expires": self.clock() + self.code_ttl,
                }
            )
            saved = await self.user_repository.save(updated)

            await self.mail_sender.send(
                to=saved.email.root,
                subject=VERIFICATION_SUBJECT,
                body=f"Your verification code is: {code}",
            )
            logfire.info("Verification code issued", user_id=str(saved.id))
            return saved

    async def verify(self, email: Email, code: str) -> User:
        """Check a submitted code and mark the email verified.

        Checks run in order: unknown email, code mismatch, expiry. A
        consumed code is cleared, so replaying it fails as a mismatch.

        Args:
            email: Email the code was sent to
            code: Submitted code, compared exactly

        Returns:
            The verified user

        Raises:
            NotFoundError: If no user has this email
            InvalidCodeError: If the code does not match
            CodeExpiredError: If the code's window has closed
        """
        with logfire.span("verification_service.verify", email=email.root):
            user = await self.user_repository.find_by_email(email)
            if not user:
                logfire.warn("Verification for unknown email", email=email.root)
                raise NotFoundError("User", email.root)

            if user.verification_code is None or user.verification_code != code:
                logfire.warn("Invalid verification code", user_id=str(user.id))
                raise InvalidCodeError(user_id=user.id)

            if (
                user.verification_expires is not None
                and self.clock() > user.verification_expires
            ):
                logfire.warn("Verification code expired", user_id=str(user.id))
                raise CodeExpiredError(user_id=user.id)

            verified = user.model_copy(
                update={
                    "is_verified": True,
                    "verification_code": None,
                    "verification_expires": None,
                }
            )
            saved = await self.user_repository.save(verified)
            logfire.info("Email verified", user_id=str(saved.id))
            return saved

    async def resend(self, email: Email) -> User:
        """Issue a fresh code for an unverified user.

        Args:
            email: Email to resend the code to

        Returns:
            The updated user

        Raises:
            NotFoundError: If no user has this email
            AlreadyVerifiedError: If the email is already verified
        """
        with logfire.span("verification_service.resend", email=email.root):
            user = await self.user_repository.find_by_email(email)
            if not user:
                raise NotFoundError("User", email.root)
            if user.is_verified:
                raise AlreadyVerifiedError(email.root, user_id=user.id)
            return await self.issue(user)
