"""Unit tests for VerificationService."""

from datetime import timedelta

import pytest

from credo.adapter.error import MailDeliveryError
from credo.adapter.mail.smtp import MockMailSender
from credo.domain.error import (
    AlreadyVerifiedError,
    CodeExpiredError,
    InvalidCodeError,
    NotFoundError,
)
from credo.domain.service import VerificationService
from credo.domain.service.verification_service import generate_code
from credo.domain.value import Email
from credo.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_user


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def mail_sender():
    return MockMailSender()


@pytest.fixture
def service(user_repo, mail_sender, auth_settings, clock):
    return VerificationService(user_repo, mail_sender, auth_settings, clock=clock)


class TestGenerateCode:
    """Tests for generate_code()."""

    def test_code_is_six_digits(self):
        """Every code is exactly six decimal digits."""
        for _ in range(200):
            code = generate_code()
            assert len(code) == 6
            assert code.isdigit()


class TestIssue:
    """Tests for VerificationService.issue()."""

    @pytest.mark.asyncio
    async def test_issue_stores_and_mails_code(
        self, service, user_repo, mail_sender, clock
    ):
        """Should store the code with a 24h window and mail it."""
        # Arrange
        user = await user_repo.create(make_user(is_verified=False))

        # Act
        updated = await service.issue(user)

        # Assert
        assert updated.verification_code is not None
        assert updated.verification_expires == clock.now + timedelta(hours=24)
        assert len(mail_sender.outbox) == 1
        sent = mail_sender.outbox[0]
        assert sent.to == "alice@example.com"
        assert sent.subject == "Verify Your Email"
        assert updated.verification_code in sent.body

    @pytest.mark.asyncio
    async def test_issue_replaces_previous_code(self, service, user_repo, mail_sender):
        """A user has at most one live code."""
        # Arrange
        user = await user_repo.create(make_user(is_verified=False))
        first = await service.issue(user)

        # Act
        second = await service.issue(first)

        # Assert
        stored = await user_repo.find_by_id(user.id)
        assert stored.verification_code == second.verification_code
        assert len(mail_sender.outbox) == 2

    @pytest.mark.asyncio
    async def test_issue_propagates_mail_failure(self, service, user_repo, mail_sender):
        """Delivery errors reach the caller."""
        # Arrange
        user = await user_repo.create(make_user(is_verified=False))
        mail_sender.fail = True

        # Act & Assert
        with pytest.raises(MailDeliveryError):
            await service.issue(user)


class TestVerify:
    """Tests for VerificationService.verify()."""

    @pytest.mark.asyncio
    async def test_verify_with_correct_code(self, service, user_repo):
        """Correct code within the window verifies and clears the code."""
        # Arrange
        user = await service.issue(
            await user_repo.create(make_user(is_verified=False))
        )

        # Act
        verified = await service.verify(Email("alice@example.com"), user.verification_code)

        # Assert
        assert verified.is_verified
        assert verified.verification_code is None
        assert verified.verification_expires is None

    @pytest.mark.asyncio
    async def test_verify_unknown_email(self, service):
        """Unknown email is reported as not found."""
        with pytest.raises(NotFoundError):
            await service.verify(Email("nobody@example.com"), "123456")

    @pytest.mark.asyncio
    async def test_verify_wrong_code(self, service, user_repo):
        """Mismatched code is rejected and attributed to the user."""
        # Arrange
        user = await service.issue(
            await user_repo.create(make_user(is_verified=False))
        )
        wrong = "000000" if user.verification_code != "000000" else "111111"

        # Act & Assert
        with pytest.raises(InvalidCodeError) as exc_info:
            await service.verify(Email("alice@example.com"), wrong)
        assert exc_info.value.user_id == user.id

    @pytest.mark.asyncio
    async def test_verify_expired_code(self, service, user_repo, clock):
        """Correct code after the window is reported as expired."""
        # Arrange
        user = await service.issue(
            await user_repo.create(make_user(is_verified=False))
        )
        clock.advance(hours=24, seconds=1)

        # Act & Assert
        with pytest.raises(CodeExpiredError):
            await service.verify(Email("alice@example.com"), user.verification_code)

    @pytest.mark.asyncio
    async def test_mismatch_checked_before_expiry(self, service, user_repo, clock):
        """A wrong code after expiry is still a mismatch."""
        # Arrange
        user = await service.issue(
            await user_repo.create(make_user(is_verified=False))
        )
        clock.advance(days=2)
        wrong = "000000" if user.verification_code != "000000" else "111111"

        # Act & Assert
        with pytest.raises(InvalidCodeError):
            await service.verify(Email("alice@example.com"), wrong)

    @pytest.mark.asyncio
    async def test_code_cannot_be_replayed(self, service, user_repo):
        """A consumed code fails as a mismatch."""
        # Arrange
        user = await service.issue(
            await user_repo.create(make_user(is_verified=False))
        )
        await service.verify(Email("alice@example.com"), user.verification_code)

        # Act & Assert
        with pytest.raises(InvalidCodeError):
            await service.verify(Email("alice@example.com"), user.verification_code)


class TestResend:
    """Tests for VerificationService.resend()."""

    @pytest.mark.asyncio
    async def test_resend_issues_new_code(self, service, user_repo, mail_sender):
        """Resend mails a fresh code to an unverified user."""
        # Arrange
        await user_repo.create(make_user(is_verified=False))

        # Act
        user = await service.resend(Email("Alice@Example.com"))

        # Assert
        assert user.verification_code is not None
        assert len(mail_sender.outbox) == 1

    @pytest.mark.asyncio
    async def test_resend_unknown_email(self, service):
        with pytest.raises(NotFoundError):
            await service.resend(Email("nobody@example.com"))

    @pytest.mark.asyncio
    async def test_resend_already_verified(self, service, user_repo, mail_sender):
        """Verified users get no new code."""
        # Arrange
        await user_repo.create(make_user(is_verified=True))

        # Act & Assert
        with pytest.raises(AlreadyVerifiedError):
            await service.resend(Email("alice@example.com"))
        assert mail_sender.outbox == []
