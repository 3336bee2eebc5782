"""
Application Use Cases — Letters

This module holds the write paths of the Tree Hole (submitting a letter and
replying to one) and the read model the operator view is built from.

Core guarantees provided:

- Exact quota: the count of today's letters for an origin and the insert of
  the new letter run inside one transaction.atomic() block that holds the
  row lock of the daily limit setting. Concurrent submissions queue on that
  lock, so each one counts every letter committed before it and the quota
  can never be overshot.
- All-or-nothing: a rejected or failed submission leaves no row behind.
- Reply consistency: reply_text and reply_created_at are written by a single
  UPDATE, always together, so the pair is either both set or both NULL.
- Explicit domain signaling: rule violations raise domain exceptions and
  database errors are re-raised as StoreFailure.

Architectural note:

Locking one settings row serialises submissions from all origins, not just
the same one. Letter submission is low-volume and the lock is held for one
COUNT and one INSERT, which keeps the data model at its two tables.
On SQLite, which has no row locks, the same serialisation comes from
opening write transactions with BEGIN IMMEDIATE (see DATABASES in settings).
"""

import logging
from datetime import timedelta, timezone as dt_timezone

from django.db import transaction
from django.utils import timezone

from letters.application.settings_store import lock_daily_limit
from letters.application.store import translate_store_errors
from letters.domain.exceptions import QuotaExceeded
from letters.domain.rules import normalize_content, normalize_reply, parse_letter_id
from letters.models import Letter

logger = logging.getLogger(__name__)


def day_bounds(now=None):
    """Returns the [start, end) datetimes of the current UTC calendar day."""
    now = (now or timezone.now()).astimezone(dt_timezone.utc)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


@translate_store_errors
def submit_letter(content, origin):
    """
    Stores a new letter if the origin still has quota left today.

    Guarantees:
    - Content is validated before any database access
    - The quota read, the count and the insert share one transaction
    - The daily limit row lock serialises concurrent submissions
    """
    text = normalize_content(content)

    with transaction.atomic():
        limit = lock_daily_limit()

        start, end = day_bounds()
        todays_count = Letter.objects.filter(
            origin=origin,
            created_at__gte=start,
            created_at__lt=end,
        ).count()

        if todays_count >= limit:
            logger.warning(
                "Quota exceeded: origin=%s count=%s limit=%s",
                origin, todays_count, limit,
            )
            raise QuotaExceeded(origin, limit)

        letter = Letter.objects.create(content=text, origin=origin)

    logger.info("Letter stored: id=%s origin=%s", letter.id, origin)
    return letter


@translate_store_errors
def save_reply(letter_id, reply_text):
    """
    Sets or clears the reply of a letter.

    Empty or whitespace-only text clears the reply. An id that matches no
    letter updates nothing and is not an error; the number of updated rows
    is returned.
    """
    letter_id = parse_letter_id(letter_id)
    text = normalize_reply(reply_text)

    replied_at = timezone.now() if text is not None else None
    updated = Letter.objects.filter(id=letter_id).update(
        reply_text=text,
        reply_created_at=replied_at,
    )

    if not updated:
        logger.info("Reply for unknown letter ignored: id=%s", letter_id)
    elif text is None:
        logger.info("Reply cleared: letter=%s", letter_id)
    else:
        logger.info("Reply saved: letter=%s", letter_id)
    return updated


@translate_store_errors
def list_letters():
    """Returns every letter, newest first, evaluated inside the store guard."""
    return list(Letter.objects.order_by("-created_at", "-id"))
