"""OAuth login use cases (redirect to the provider, then handle its callback)."""

import secrets

import logfire
from pydantic import BaseModel

from credo.adapter.error import AdapterError, ProviderError
from credo.application.usecase.base import (
    BaseUseCase,
    as_domain_error,
    audit_status,
    user_id_of,
)
from credo.domain.error import DomainError, NotFoundError
from credo.domain.service import (
    AuditLogService,
    AuthService,
    IdentityService,
    SessionService,
)
from credo.domain.value import AuthAction, AuthProvider, AuthStatus, RequestContext


def parse_provider(value: str) -> AuthProvider:
    """Resolve a provider name from the URL.

    Raises:
        NotFoundError: If the name is not a supported provider
    """
    try:
        return AuthProvider(value.lower())
    except ValueError as e:
        raise NotFoundError("OAuth provider", value) from e


class InitiateOAuthLoginRequest(BaseModel):
    """Initiate OAuth login request."""

    provider: str


class InitiateOAuthLoginResponse(BaseModel):
    """Initiate OAuth login response."""

    authorization_url: str


class InitiateOAuthLoginUseCase(BaseUseCase):
    """Use case for starting an OAuth handshake."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(
        self, request: InitiateOAuthLoginRequest
    ) -> InitiateOAuthLoginResponse:
        """Build the provider redirect with a fresh CSRF state.

        Raises:
            NotFoundError: Unknown or unconfigured provider
        """
        provider = parse_provider(request.provider)
        state = secrets.token_urlsafe(32)
        url = await self.auth_service.initiate_login(provider, state)
        return InitiateOAuthLoginResponse(authorization_url=url)


class CompleteOAuthLoginRequest(BaseModel):
    """OAuth callback parameters.

    ``error`` is set by the provider when the user declined.
    """

    provider: str
    code: str | None = None
    state: str | None = None
    error: str | None = None
    context: RequestContext = RequestContext()


class CompleteOAuthLoginResponse(BaseModel):
    """Complete OAuth login response."""

    session_id: str
    user_id: str
    provider: AuthProvider


class CompleteOAuthLoginUseCase(BaseUseCase):
    """Use case for finishing an OAuth handshake and signing the user in."""

    def __init__(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        session_service: SessionService,
        audit_log_service: AuditLogService,
    ) -> None:
        """Initialize OAuth login use case.

        Args:
            auth_service: OAuth handshake domain service
            identity_service: Identity domain service
            session_service: Session domain service
            audit_log_service: Audit log domain service
        """
        self.auth_service = auth_service
        self.identity_service = identity_service
        self.session_service = session_service
        self.audit_log_service = audit_log_service

    async def execute(
        self, request: CompleteOAuthLoginRequest
    ) -> CompleteOAuthLoginResponse:
        """Exchange the code, resolve the identity and open a session.

        Raises:
            NotFoundError: Unknown or unconfigured provider
            AlreadyExistsError: Email taken and linking disabled
            DependencyFailureError: Provider refused or failed
        """
        provider = parse_provider(request.provider)

        with logfire.span("oauth_login", provider=provider.value):
            try:
                if request.error or not request.code or not request.state:
                    raise ProviderError(
                        f"Authorization not granted: {request.error or 'missing code'}"
                    )
                profile = await self.auth_service.complete_login(
                    provider, request.code, request.state
                )
                user = await self.identity_service.resolve_external_identity(profile)
            except NotFoundError:
                # Unknown or unconfigured provider
                await self.audit_log_service.record(
                    None,
                    AuthAction.OAUTH_LOGIN,
                    AuthStatus.PROVIDER_ERROR,
                    request.context,
                )
                raise
            except DomainError as e:
                await self.audit_log_service.record(
                    user_id_of(e),
                    AuthAction.OAUTH_LOGIN,
                    audit_status(e),
                    request.context,
                )
                raise
            except AdapterError as e:
                logfire.warn(
                    "OAuth login failed", provider=provider.value, error=str(e)
                )
                await self.audit_log_service.record(
                    None, AuthAction.OAUTH_LOGIN, audit_status(e), request.context
                )
                raise as_domain_error(e) from e

            session_id = await self.session_service.login(user)
            await self.audit_log_service.record(
                user.id, AuthAction.OAUTH_LOGIN, AuthStatus.SUCCESS, request.context
            )

        return CompleteOAuthLoginResponse(
            session_id=session_id, user_id=str(user.id), provider=provider
        )
