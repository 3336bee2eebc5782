from letters.models import ORIGIN_MAX_LENGTH

UNKNOWN_ORIGIN = "unknown"


def client_origin(request):
    """
    Derives the quota grouping key of a request.

    The first X-Forwarded-For entry wins over the socket address. Clients can
    set that header themselves, so the origin is a grouping key, not an
    identity.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    origin = forwarded.split(",")[0].strip()
    if not origin:
        origin = request.META.get("REMOTE_ADDR") or UNKNOWN_ORIGIN
    return origin[:ORIGIN_MAX_LENGTH]
