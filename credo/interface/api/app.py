"""FastAPI application."""

from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from credo.config import Settings
from credo.domain.service import SessionService
from credo.interface.api.routes import auth, health
from credo.util.di.container import create_container, setup_di
from credo.util.logging import setup_logging
from credo.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Drop sessions that expired while the process was down."""
    container: AsyncContainer = app.state.dishka_container
    async with container() as request_container:
        session_service = await request_container.get(SessionService)
        await session_service.purge_expired()
    yield
    await container.close()


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors (400), like any other bad input."""
    logfire.info("Request validation failed", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()
    setup_logging(settings)

    # Instrument httpx for outbound OAuth requests
    instrument_httpx()

    app_instance = FastAPI(
        title="Credo API",
        description="Credential and session service: local and OAuth sign-in, "
        "email verification and server-side sessions",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    if settings.cors_origins:
        app_instance.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,  # Session cookie
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
            max_age=600,
        )

    # Setup dependency injection
    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(
        RequestValidationError, validation_exception_handler
    )

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    return app_instance
