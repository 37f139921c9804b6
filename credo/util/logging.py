"""Standard library logging for the route modules.

Services and adapters log through logfire; see credo.util.observability.
"""

import logging
import sys

from credo.config import Settings

# Chatty at INFO and never about authentication
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "asyncio", "multipart")


def setup_logging(settings: Settings) -> None:
    """Configure root logging from settings.

    DEBUG when ``settings.debug`` is on, INFO otherwise.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stdout,
        force=True,  # uvicorn may have configured logging already
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("credo").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
