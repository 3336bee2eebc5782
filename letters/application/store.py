import functools
import logging

from django.db import DatabaseError

from letters.domain.exceptions import StoreFailure

logger = logging.getLogger(__name__)


def translate_store_errors(func):
    """
    Re-raises database errors from ``func`` as StoreFailure.

    The DatabaseError is chained, so the view that logs the failure still
    sees the driver detail.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error("Store operation %s failed: %s", func.__name__, exc)
            raise StoreFailure(str(exc)) from exc

    return wrapper
