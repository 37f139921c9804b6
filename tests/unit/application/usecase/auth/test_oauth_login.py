"""Unit tests for the OAuth login use cases."""

from dishka import AsyncContainer
import pytest

from credo.application.usecase.auth.oauth_login import (
    CompleteOAuthLoginRequest,
    CompleteOAuthLoginUseCase,
    InitiateOAuthLoginRequest,
    InitiateOAuthLoginUseCase,
)
from credo.domain.error import DependencyFailureError, NotFoundError
from credo.domain.repository import AuthEventRepository, UserRepository
from credo.domain.value import AuthAction, AuthProvider, AuthStatus, Email
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInitiateOAuthLoginUseCase:
    """Tests for InitiateOAuthLoginUseCase."""

    @pytest.mark.asyncio
    async def test_returns_provider_url_with_state(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(InitiateOAuthLoginUseCase)

        response = await use_case.execute(InitiateOAuthLoginRequest(provider="google"))

        assert response.authorization_url.startswith("https://google.example.com/")
        assert "state=" in response.authorization_url

    @pytest.mark.asyncio
    async def test_unknown_provider(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(InitiateOAuthLoginUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(InitiateOAuthLoginRequest(provider="myspace"))


class TestCompleteOAuthLoginUseCase:
    """Tests for CompleteOAuthLoginUseCase."""

    @pytest.mark.asyncio
    async def test_new_identity_creates_user_and_session(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        use_case = await unit_env.get(CompleteOAuthLoginUseCase)
        user_repo = await unit_env.get(UserRepository)
        events = await unit_env.get(AuthEventRepository)

        # Act
        response = await use_case.execute(
            CompleteOAuthLoginRequest(provider="amazon", code="code", state="state")
        )

        # Assert
        user = await user_repo.find_by_provider_identity(
            AuthProvider.AMAZON, "mock-amazon-123"
        )
        assert str(user.id) == response.user_id
        assert user.is_verified
        assert response.provider == AuthProvider.AMAZON
        assert response.session_id
        assert events.events[-1].action == AuthAction.OAUTH_LOGIN
        assert events.events[-1].status == AuthStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_links_to_existing_local_user(self, unit_env: AsyncContainer):
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        local = await user_repo.create(make_user(email="mock@google.example.com"))
        use_case = await unit_env.get(CompleteOAuthLoginUseCase)

        # Act
        response = await use_case.execute(
            CompleteOAuthLoginRequest(provider="google", code="code", state="state")
        )

        # Assert
        assert response.user_id == str(local.id)
        linked = await user_repo.find_by_email(Email("mock@google.example.com"))
        assert linked.google_id == "mock-google-123"

    @pytest.mark.asyncio
    async def test_provider_declined(self, unit_env: AsyncContainer):
        """A provider ``error`` parameter is a dependency failure, audited."""
        # Arrange
        use_case = await unit_env.get(CompleteOAuthLoginUseCase)
        events = await unit_env.get(AuthEventRepository)

        # Act & Assert
        with pytest.raises(DependencyFailureError):
            await use_case.execute(
                CompleteOAuthLoginRequest(provider="google", error="access_denied")
            )
        assert events.events[-1].status == AuthStatus.PROVIDER_ERROR

    @pytest.mark.asyncio
    async def test_provider_failure(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(CompleteOAuthLoginUseCase)

        with pytest.raises(DependencyFailureError):
            await use_case.execute(
                CompleteOAuthLoginRequest(provider="idme", code="fail", state="s")
            )

    @pytest.mark.asyncio
    async def test_unknown_provider_rejected_before_handshake(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(CompleteOAuthLoginUseCase)
        events = await unit_env.get(AuthEventRepository)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CompleteOAuthLoginRequest(provider="myspace", code="c", state="s")
            )
        assert events.events == []
