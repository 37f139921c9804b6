"""Verify email use case."""

from pydantic import BaseModel

from credo.application.usecase.base import (
    BaseUseCase,
    audit_status,
    parse_email,
    user_id_of,
)
from credo.domain.error import DomainError
from credo.domain.service import AuditLogService, VerificationService
from credo.domain.value import AuthAction, AuthStatus, RequestContext


class VerifyEmailRequest(BaseModel):
    """Verify email request."""

    email: str
    code: str
    context: RequestContext = RequestContext()


class VerifyEmailResponse(BaseModel):
    """Verify email response."""

    message: str = "Email verified successfully"


class VerifyEmailUseCase(BaseUseCase):
    """Use case for confirming an email address with its code."""

    def __init__(
        self,
        verification_service: VerificationService,
        audit_log_service: AuditLogService,
    ) -> None:
        self.verification_service = verification_service
        self.audit_log_service = audit_log_service

    async def execute(self, request: VerifyEmailRequest) -> VerifyEmailResponse:
        """Check the code and mark the email verified.

        Raises:
            NotFoundError: Unknown email
            InvalidCodeError: Code does not match
            CodeExpiredError: Code window closed
        """
        try:
            email = parse_email(request.email)
            user = await self.verification_service.verify(email, request.code)
        except DomainError as e:
            await self.audit_log_service.record(
                user_id_of(e), AuthAction.VERIFY, audit_status(e), request.context
            )
            raise

        await self.audit_log_service.record(
            user.id, AuthAction.VERIFY, AuthStatus.SUCCESS, request.context
        )
        return VerifyEmailResponse()
