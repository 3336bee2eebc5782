import logging

from django.conf import settings
from django.utils.crypto import constant_time_compare

from letters.domain.exceptions import Unauthorized

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def check_admin_token(provided):
    """
    Authorises an operator request by its shared secret.

    Every admin request presents the secret again; there is no session or
    token issuance. An empty configured secret authorises nobody.
    """
    expected = settings.TREEHOLE_ADMIN_TOKEN
    if not provided or not expected or not constant_time_compare(provided, expected):
        logger.warning("Rejected admin request: missing or invalid %s", ADMIN_TOKEN_HEADER)
        raise Unauthorized()
