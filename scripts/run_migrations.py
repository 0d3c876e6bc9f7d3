#!/usr/bin/env python3
"""Apply Alembic migrations to the accounts database.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from passage.config import Settings
from passage.util.logging import setup_logging
from passage.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema, reporting failures to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    target = argv[1] if len(argv) > 1 else "head"
    # Never log credentials from the URL
    database = make_url(settings.database_url)

    with logfire.span(
        "migrations.upgrade",
        target=target,
        host=database.host,
        database=database.database,
    ):
        try:
            command.upgrade(Config("alembic.ini"), target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than start against a broken schema
            raise

        logfire.info("Database migrations applied", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
