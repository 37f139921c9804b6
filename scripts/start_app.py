#!/usr/bin/env python3
"""Start the Credo API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from credo.config import Settings
from credo.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info("Starting Credo API", base_url=settings.api.base_url)

        # The app is built by a factory so tests can pass their own container
        uvicorn.run(
            "credo.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the process exits non-zero
        raise


if __name__ == "__main__":
    sys.exit(main())
