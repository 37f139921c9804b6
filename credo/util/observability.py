"""Logfire setup and instrumentation.

Services and adapters log with logfire directly:

    logfire.info("Session opened", user_id=str(user.id))

    with logfire.span("verification_service.verify", email=email.root):
        ...

Passwords, session handles and cookies are scrubbed by logfire's default
patterns; verification codes are added here.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from credo.config import Settings

# Attribute names whose values never leave the process
_SCRUB_PATTERNS = ["verification_code", "client_secret", "access_token"]


def _should_send(settings: Settings) -> bool:
    """Explicit setting first, then token presence."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process.

    Console output always; export to Logfire cloud only when a token is
    set or ``OBSERVABILITY__SEND_TO_LOGFIRE`` asks for it.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name="credo",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes.

    Args:
        app: FastAPI application instance
    """

    def _request_attributes(request, attributes):
        # Path and client only: query strings carry OAuth codes and states
        result = {**attributes, "path": request.url.path}
        if request.client:
            result["client_host"] = request.client.host
        return result

    # Cookies carry session handles, so headers are not captured
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls="/health",
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the given engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound OAuth token and user-info calls."""
    logfire.instrument_httpx()
