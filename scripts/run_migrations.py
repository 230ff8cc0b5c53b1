#!/usr/bin/env python3
"""Apply the vote ledger schema with Logfire error tracking."""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from tally.config import Settings
from tally.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision`` and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting database migrations",
            revision=revision,
            environment=settings.environment,
        )

        command.upgrade(Config(str(ALEMBIC_INI)), revision)

        logfire.info("Database migrations completed successfully", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't serve votes on a broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
