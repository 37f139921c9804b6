"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, EmailStr, Field

from credo.application.usecase.auth import (
    CompleteOAuthLoginUseCase,
    GetCurrentUserUseCase,
    InitiateOAuthLoginUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
    ResendCodeUseCase,
    VerifyEmailUseCase,
)
from credo.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from credo.application.usecase.auth.login import LoginRequest, LoginUser
from credo.application.usecase.auth.logout import LogoutRequest, LogoutResponse
from credo.application.usecase.auth.oauth_login import (
    CompleteOAuthLoginRequest,
    InitiateOAuthLoginRequest,
)
from credo.application.usecase.auth.register import RegisterRequest, RegisterResponse
from credo.application.usecase.auth.resend_code import (
    ResendCodeRequest,
    ResendCodeResponse,
)
from credo.application.usecase.auth.verify_email import (
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from credo.config import Settings
from credo.domain.error import (
    AlreadyExistsError,
    DependencyFailureError,
    DomainError,
)
from credo.domain.value import RequestContext
from credo.interface.error import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth", tags=["authentication"], route_class=DishkaRoute
)


class RegisterBody(BaseModel):
    """Registration form.

    Left unconstrained here; the use case validates so rejections are audited.
    """

    email: str = ""
    password: str = ""


class VerifyBody(BaseModel):
    """Verification form."""

    email: EmailStr
    code: str = Field(min_length=6, max_length=6)


class ResendCodeBody(BaseModel):
    """Resend code form."""

    email: EmailStr


class LoginBody(BaseModel):
    """Login form."""

    email: EmailStr
    password: str = Field(min_length=1)


class LoginResult(BaseModel):
    """Login response body. The session handle travels only in the cookie."""

    message: str
    user: LoginUser


def request_context(request: Request) -> RequestContext:
    """Client IP (first X-Forwarded-For hop if behind a proxy) and user agent."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    return RequestContext(
        ip_address=ip_address, user_agent=request.headers.get("user-agent")
    )


def set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    """Attach the session handle as an HttpOnly cookie."""
    response.set_cookie(
        key=settings.auth.session_cookie_name,
        value=session_id,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
        max_age=settings.auth.session_ttl_hours * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.auth.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def _session_id(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.auth.session_cookie_name)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterBody,
    request: Request,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Create a local account and email a verification code.

    Example:
        POST /api/auth/register
        {"email": "alice@example.com", "password": "correct horse"}
    """
    try:
        return await register_use_case.execute(
            RegisterRequest(
                email=body.email,
                password=body.password,
                context=request_context(request),
            )
        )
    except DomainError as e:
        logger.info(f"Registration rejected: {type(e).__name__}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during registration: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.post("/verify", response_model=VerifyEmailResponse)
async def verify(
    body: VerifyBody,
    request: Request,
    verify_email_use_case: FromDishka[VerifyEmailUseCase],
) -> VerifyEmailResponse:
    """Confirm an email address with its 6-digit code."""
    try:
        return await verify_email_use_case.execute(
            VerifyEmailRequest(
                email=body.email, code=body.code, context=request_context(request)
            )
        )
    except DomainError as e:
        logger.info(f"Verification rejected: {type(e).__name__}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during verification: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.post("/resend-code", response_model=ResendCodeResponse)
async def resend_code(
    body: ResendCodeBody,
    request: Request,
    resend_code_use_case: FromDishka[ResendCodeUseCase],
) -> ResendCodeResponse:
    """Replace the outstanding verification code and email the new one."""
    try:
        return await resend_code_use_case.execute(
            ResendCodeRequest(email=body.email, context=request_context(request))
        )
    except DomainError as e:
        logger.info(f"Resend rejected: {type(e).__name__}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error resending code: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.post("/login", response_model=LoginResult)
async def login(
    body: LoginBody,
    request: Request,
    response: Response,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
) -> LoginResult:
    """Log in with email and password; sets the session cookie."""
    try:
        result = await login_use_case.execute(
            LoginRequest(
                email=body.email,
                password=body.password,
                context=request_context(request),
            )
        )
    except DomainError as e:
        logger.info(f"Login rejected: {type(e).__name__}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during login: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )

    set_session_cookie(response, result.session_id, settings)
    return LoginResult(message=result.message, user=result.user)


@router.api_route("/logout", methods=["GET", "POST"], response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    logout_use_case: FromDishka[LogoutUseCase],
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """End the session, if any, and clear the cookie. Always succeeds."""
    result = await logout_use_case.execute(
        LogoutRequest(
            session_id=_session_id(request, settings),
            context=request_context(request),
        )
    )
    clear_session_cookie(response, settings)
    return result


@router.get("/status", response_model=GetCurrentUserResponse)
async def auth_status(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
) -> GetCurrentUserResponse:
    """Report whether the session cookie belongs to a user.

    Safe to call without a session: answers ``authenticated: false``.

    Examples:
        {"authenticated": true, "user": {"id": "...", "email": "...", ...}}
        {"authenticated": false, "user": null}
    """
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(session_id=_session_id(request, settings))
    )


@router.get("/{provider}")
async def oauth_redirect(
    provider: str,
    initiate_use_case: FromDishka[InitiateOAuthLoginUseCase],
) -> RedirectResponse:
    """Send the browser to the provider's consent page.

    Example:
        GET /api/auth/google -> 302 https://accounts.google.com/o/oauth2/v2/auth?...
    """
    try:
        result = await initiate_use_case.execute(
            InitiateOAuthLoginRequest(provider=provider)
        )
    except DomainError as e:
        raise to_http_exception(e)

    logger.info(f"Redirecting to {provider} for authorization")
    return RedirectResponse(
        url=result.authorization_url, status_code=status.HTTP_302_FOUND
    )


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: str,
    request: Request,
    complete_use_case: FromDishka[CompleteOAuthLoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle the provider's redirect, sign the user in and set the cookie.

    Failures of the provider or an unlinkable account send the browser to
    the configured failure page instead of returning an error body.
    """
    logger.info(f"OAuth callback received: provider={provider}")

    try:
        result = await complete_use_case.execute(
            CompleteOAuthLoginRequest(
                provider=provider,
                code=code,
                state=state,
                error=error,
                context=request_context(request),
            )
        )
    except (DependencyFailureError, AlreadyExistsError) as e:
        logger.warning(f"OAuth login failed for {provider}: {str(e)}")
        return RedirectResponse(
            url=settings.auth.login_failure_redirect_url,
            status_code=status.HTTP_302_FOUND,
        )
    except DomainError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during OAuth callback: {str(e)}")
        return RedirectResponse(
            url=settings.auth.login_failure_redirect_url,
            status_code=status.HTTP_302_FOUND,
        )

    redirect_response = RedirectResponse(
        url=settings.auth.login_redirect_url, status_code=status.HTTP_302_FOUND
    )
    # Cookies must be set on the returned response object
    set_session_cookie(redirect_response, result.session_id, settings)
    logger.info(f"OAuth login successful for user: {result.user_id}")
    return redirect_response
