"""Authentication use cases."""

from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .logout import LogoutUseCase
from .oauth_login import CompleteOAuthLoginUseCase, InitiateOAuthLoginUseCase
from .register import RegisterUseCase
from .resend_code import ResendCodeUseCase
from .verify_email import VerifyEmailUseCase

__all__ = [
    "CompleteOAuthLoginUseCase",
    "GetCurrentUserUseCase",
    "InitiateOAuthLoginUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RegisterUseCase",
    "ResendCodeUseCase",
    "VerifyEmailUseCase",
]
