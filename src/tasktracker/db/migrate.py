"""Programmatic Alembic runner.

Learn: the migration scripts ship inside the package, so instead of an
alembic.ini next to the checkout we build the Alembic Config in code and
point script_location at tasktracker/db/migrations. That keeps
`tasktracker migrate` working from any directory after pip install.
"""

from pathlib import Path
from typing import Optional

import structlog
from alembic import command
from alembic.config import Config

logger = structlog.get_logger()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def alembic_config(database_url: Optional[str] = None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    if database_url:
        cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return cfg


def upgrade(database_url: Optional[str] = None, revision: str = "head") -> None:
    """Apply migrations up to `revision` (default: latest)."""
    logger.info("db.migrate", revision=revision)
    command.upgrade(alembic_config(database_url), revision)
