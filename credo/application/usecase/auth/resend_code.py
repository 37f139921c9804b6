"""Resend verification code use case."""

import logfire
from pydantic import BaseModel

from credo.adapter.error import AdapterError
from credo.application.usecase.base import (
    BaseUseCase,
    as_domain_error,
    audit_status,
    parse_email,
    user_id_of,
)
from credo.domain.error import DomainError
from credo.domain.service import AuditLogService, VerificationService
from credo.domain.value import AuthAction, AuthStatus, RequestContext


class ResendCodeRequest(BaseModel):
    """Resend code request."""

    email: str
    context: RequestContext = RequestContext()


class ResendCodeResponse(BaseModel):
    """Resend code response."""

    message: str = "Verification code sent"


class ResendCodeUseCase(BaseUseCase):
    """Use case for issuing a fresh verification code."""

    def __init__(
        self,
        verification_service: VerificationService,
        audit_log_service: AuditLogService,
    ) -> None:
        self.verification_service = verification_service
        self.audit_log_service = audit_log_service

    async def execute(self, request: ResendCodeRequest) -> ResendCodeResponse:
        """Replace the outstanding code and mail the new one.

        Raises:
            NotFoundError: Unknown email
            AlreadyVerifiedError: Nothing left to verify
            DependencyFailureError: Mail could not be sent
        """
        try:
            email = parse_email(request.email)
            user = await self.verification_service.resend(email)
        except DomainError as e:
            await self.audit_log_service.record(
                user_id_of(e), AuthAction.RESEND_CODE, audit_status(e), request.context
            )
            raise
        except AdapterError as e:
            logfire.error("Resending code failed in adapter", error=str(e))
            await self.audit_log_service.record(
                None, AuthAction.RESEND_CODE, audit_status(e), request.context
            )
            raise as_domain_error(e) from e

        await self.audit_log_service.record(
            user.id, AuthAction.RESEND_CODE, AuthStatus.SUCCESS, request.context
        )
        return ResendCodeResponse()
