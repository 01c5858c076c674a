"""Apply Alembic migrations: ``python -m warehouse_service.migrate [revision]``."""
import logging
import os
import sys
from typing import Optional

from alembic import command
from alembic.config import Config

from shared.core.config import settings
from shared.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def build_alembic_config(database_url: Optional[str] = None) -> Config:
    config = Config()
    config.set_main_option("script_location", os.path.join(PACKAGE_DIR, "migrations"))
    # ConfigParser treats % as interpolation
    url = (database_url or settings.database_url).replace("%", "%%")
    config.set_main_option("sqlalchemy.url", url)
    return config


def run_migrations(database_url: Optional[str] = None, revision: str = "head") -> None:
    config = build_alembic_config(database_url)
    logger.info("Upgrading database to %s", revision)
    command.upgrade(config, revision)


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    run_migrations(revision=sys.argv[1] if len(sys.argv) > 1 else "head")
