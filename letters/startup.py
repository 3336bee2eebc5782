import logging

from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError

from letters.domain.exceptions import StoreFailure

logger = logging.getLogger(__name__)


def ensure_schema():
    """
    Applies pending migrations before the first request is served.

    Migrating an up-to-date database is a no-op, so this runs on every
    start. Any failure is raised as StoreFailure and must stop the process.
    """
    logger.info("Preparing database schema")
    try:
        call_command("migrate", interactive=False, verbosity=0)
    except (DatabaseError, CommandError) as exc:
        logger.critical("Database schema initialisation failed: %s", exc)
        raise StoreFailure("database schema initialisation failed") from exc
    logger.info("Database schema ready")
