"""
Server entry point: ``treehole-server`` or ``python -m treehole``.

Prepares the database schema, then serves requests with Django's threaded
server. Exits with status 1 without serving if the schema cannot be
prepared.
"""

import logging
import os
import sys

import django
from django.core.management import call_command
from django.db import connections

logger = logging.getLogger("treehole")


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "treehole.settings")
    django.setup()

    from letters.domain.exceptions import StoreFailure
    from letters.startup import ensure_schema
    from treehole.config import get_config

    config = get_config()
    try:
        ensure_schema()
    except StoreFailure:
        logger.critical("Refusing to start: database schema is not ready")
        return 1

    logger.info("Tree Hole server listening on http://%s:%s", config.host, config.port)
    try:
        call_command("runserver", f"{config.host}:{config.port}", use_reloader=False)
    finally:
        connections.close_all()
    return 0


if __name__ == "__main__":
    sys.exit(main())
