#!/usr/bin/env python3
"""Upgrade the credential store to the latest schema before the API starts."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from credo.config import Settings
from credo.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    # migrations/env.py reads the URL from Settings, not alembic.ini
    logfire.info("Upgrading schema", database_url=settings.database_url.split("@")[-1])
    try:
        command.upgrade(Config("alembic.ini"), "head")
    except Exception as e:
        logfire.error(
            "Schema upgrade failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Never serve credentials against a half-migrated schema
        raise

    logfire.info("Schema is at head")
    return 0


if __name__ == "__main__":
    sys.exit(main())
