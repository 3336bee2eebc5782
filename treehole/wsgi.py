"""
WSGI entry point for the Tree Hole.

The schema is migrated before the application object exists; if that
fails the import raises and the WSGI server refuses to start.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "treehole.settings")

application = get_wsgi_application()

from letters.startup import ensure_schema  # noqa: E402

ensure_schema()
