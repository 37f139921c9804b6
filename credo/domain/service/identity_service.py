"""Identity resolution domain service.

Turns presented credentials (a local password, or a provider profile
obtained through OAuth) into a single user record.
"""

import asyncio
from datetime import datetime
from typing import Callable
from uuid import uuid4

import logfire

from credo.config import AuthSettings
from credo.domain.error import (
    AlreadyExistsError,
    InvalidCredentialsError,
    NotVerifiedError,
)
from credo.domain.model.user import PROVIDER_ID_FIELDS, User, utcnow
from credo.domain.repository import UserRepository
from credo.domain.value import Email, ExternalProfile, UserId
from credo.util.password import hash_password, verify_password

from .base import Service
from .verification_service import VerificationService

# Profile attributes copied from a provider profile onto the user
_PROFILE_FIELDS = ("display_name", "first_name", "last_name", "avatar_url")


class IdentityService(Service):
    """Domain service for registration and identity resolution."""

    def __init__(
        self,
        user_repository: UserRepository,
        verification_service: VerificationService,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            verification_service: Issues the registration code
            auth_settings: Authentication settings
            clock: Source of the current time
        """
        self.user_repository = user_repository
        self.verification_service = verification_service
        self.auth_settings = auth_settings
        self.clock = clock

    async def register(self, email: Email, password: str) -> User:
        """Create an unverified local user and send a verification code.

        Args:
            email: Normalized email
            password: Plain-text password (length already validated)

        Returns:
            The new user, carrying its outstanding code

        Raises:
            AlreadyExistsError: If the email is taken
            MailDeliveryError: If the code could not be sent
        """
        with logfire.span("identity_service.register", email=email.root):
            existing = await self.user_repository.find_by_email(email)
            if existing:
                logfire.warn("Email already registered", user_id=str(existing.id))
                raise AlreadyExistsError("User", email.root, user_id=existing.id)

            password_hash = await asyncio.to_thread(
                hash_password, password, self.auth_settings
            )
            user = User(
                id=UserId(uuid4()),
                email=email,
                password_hash=password_hash,
                is_verified=False,
                created_at=self.clock(),
            )
            created = await self.user_repository.create(user)
            logfire.info("Local user created", user_id=str(created.id))

            return await self.verification_service.issue(created)

    async def authenticate_local(self, email: Email, password: str) -> User:
        """Authenticate with email and password.

        Args:
            email: Normalized email
            password: Plain-text password

        Returns:
            The authenticated user, with ``last_login`` updated

        Raises:
            InvalidCredentialsError: Unknown email, no local password, or
                wrong password
            NotVerifiedError: Correct password but email not verified
        """
        with logfire.span("identity_service.authenticate_local", email=email.root):
            user = await self.user_repository.find_by_email(email)
            if not user or not user.has_password:
                logfire.warn("No local credentials", email=email.root)
                raise InvalidCredentialsError()

            matches = await asyncio.to_thread(
                verify_password, password, user.password_hash
            )
            if not matches:
                logfire.warn("Invalid credentials", user_id=str(user.id))
                raise InvalidCredentialsError()

            if not user.is_verified:
                logfire.warn("Login before verification", user_id=str(user.id))
                raise NotVerifiedError(email.root, user_id=user.id)

            return await self._touch_last_login(user)

    async def resolve_external_identity(self, profile: ExternalProfile) -> User:
        """Find or create the user for a provider profile.

        Lookup is by the provider's external id, falling back to email
        when email linking is enabled and the provider vouches for the
        address. A found user gets the provider slot filled if empty; an
        existing link is never overwritten. An unknown identity becomes
        a new, already-verified user.

        Args:
            profile: Normalized profile from the OAuth handshake

        Returns:
            The resolved user, with ``last_login`` updated

        Raises:
            AlreadyExistsError: If the email belongs to another user and
                email linking is disabled
        """
        provider = profile.provider
        email = Email(profile.email)

        with logfire.span(
            "identity_service.resolve_external_identity",
            provider=provider.value,
            external_id=profile.external_id,
        ):
            if self.auth_settings.link_accounts_by_email and profile.email_verified:
                user = await self.user_repository.find_by_provider_identity_or_email(
                    provider, profile.external_id, email
                )
            else:
                user = await self.user_repository.find_by_provider_identity(
                    provider, profile.external_id
                )

            if user:
                user = self._link(user, profile)
                logfire.info(
                    "External identity resolved to existing user",
                    user_id=str(user.id),
                    provider=provider.value,
                )
                return await self._touch_last_login(user)

            new_user = User(
                id=UserId(uuid4()),
                email=email,
                is_verified=True,  # The provider verified the address
                idme_affiliation=profile.affiliation,
                created_at=self.clock(),
                last_login=self.clock(),
                **{PROVIDER_ID_FIELDS[provider]: profile.external_id},
                **{field: getattr(profile, field) for field in _PROFILE_FIELDS},
            )

            try:
                created = await self.user_repository.create(new_user)
            except AlreadyExistsError:
                # A concurrent callback for the same identity won the insert
                winner = await self.user_repository.find_by_provider_identity(
                    provider, profile.external_id
                )
                if not winner:
                    raise
                logfire.info(
                    "Concurrent identity creation resolved to existing user",
                    user_id=str(winner.id),
                    provider=provider.value,
                )
                return await self._touch_last_login(winner)

            logfire.info(
                "User created from external identity",
                user_id=str(created.id),
                provider=provider.value,
            )
            return created

    def _link(self, user: User, profile: ExternalProfile) -> User:
        """Fill the provider slot and blank profile fields."""
        linked = user.external_id(profile.provider)
        if linked is None:
            user = user.with_external_id(profile.provider, profile.external_id)
            logfire.info(
                "Linked external identity",
                user_id=str(user.id),
                provider=profile.provider.value,
            )
        elif linked != profile.external_id:
            logfire.warn(
                "Email matched a user linked to a different identity on this provider",
                user_id=str(user.id),
                provider=profile.provider.value,
            )

        blanks = {
            field: getattr(profile, field)
            for field in _PROFILE_FIELDS
            if getattr(user, field) is None and getattr(profile, field) is not None
        }
        if user.idme_affiliation is None and profile.affiliation is not None:
            blanks["idme_affiliation"] = profile.affiliation
        return user.model_copy(update=blanks) if blanks else user

    async def _touch_last_login(self, user: User) -> User:
        return await self.user_repository.save(
            user.model_copy(update={"last_login": self.clock()})
        )
