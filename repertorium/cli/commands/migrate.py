"""Migrate command - bring the database schema up to date."""

import sys

import cyclopts
from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError

from repertorium.cli.console import get_console
from repertorium.config import Config
from repertorium.infrastructure.persistence.migrate import run_migrations

app = cyclopts.App(name="migrate", help="Run database migrations")


@app.default
def migrate(revision: str = "head") -> None:
    """Upgrade the configured database.

    Args:
        revision: Alembic revision to upgrade to.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]

    try:
        with console.status("Running migrations..."):
            run_migrations(config.database.url, revision)
    except (CommandError, SQLAlchemyError) as e:
        console.error(f"Migration failed: {e}", hint=f"Database: {config.database.url}")
        sys.exit(1)

    console.success(f"Database at {revision}")
