"""
Application Service — Settings Store

Typed access to the key/value ``settings`` table.

Core guarantees provided:

- Defaults are materialised by an explicit, idempotent ensure-default step
  built on get_or_create. Two requests racing on the first read of an absent
  key both succeed: the loser's INSERT hits the primary key, Django rolls
  back to a savepoint and re-reads the winner's row.
- Writes are upserts (update_or_create); there is no insert-or-fail path.
- A malformed daily limit never breaks submissions. It reads as the default
  and is left in place for the operator to fix.
- lock_daily_limit() is the serialisation point of the submission path:
  it holds the row lock of the limit setting until the caller's
  transaction ends.
"""

import logging

from django.db import transaction

from letters.application.store import translate_store_errors
from letters.domain.rules import parse_positive_int
from letters.models import Setting

logger = logging.getLogger(__name__)

DAILY_LIMIT_KEY = "daily_limit"
DEFAULT_DAILY_LIMIT = 1

DEFAULTS = {
    DAILY_LIMIT_KEY: str(DEFAULT_DAILY_LIMIT),
}


def ensure_default(key):
    """Returns the row for ``key``, inserting the built-in default if absent."""
    setting, created = Setting.objects.get_or_create(
        key=key,
        defaults={"value": DEFAULTS[key]},
    )
    if created:
        logger.info("Materialised default setting: %s=%s", key, setting.value)
    return setting


@translate_store_errors
def get_setting(key):
    return ensure_default(key).value


@translate_store_errors
def set_setting(key, value):
    Setting.objects.update_or_create(key=key, defaults={"value": value})
    logger.info("Setting updated: %s=%s", key, value)


def _decode_daily_limit(raw):
    limit = parse_positive_int(raw)
    if limit is None:
        logger.warning(
            "Malformed %s value %r, using default %s",
            DAILY_LIMIT_KEY, raw, DEFAULT_DAILY_LIMIT,
        )
        return DEFAULT_DAILY_LIMIT
    return limit


def get_daily_limit():
    return _decode_daily_limit(get_setting(DAILY_LIMIT_KEY))


@translate_store_errors
def set_daily_limit(limit):
    # Same lock as submissions, so a limit change never lands between a
    # submission's count and its insert.
    with transaction.atomic():
        lock_daily_limit()
        Setting.objects.filter(key=DAILY_LIMIT_KEY).update(value=str(limit))
    logger.info("Setting updated: %s=%s", DAILY_LIMIT_KEY, limit)


def lock_daily_limit():
    """
    Locks the daily limit row and returns the decoded limit.

    Must be called inside transaction.atomic(); the lock is released when
    that transaction commits or rolls back.
    """
    ensure_default(DAILY_LIMIT_KEY)
    setting = Setting.objects.select_for_update().get(key=DAILY_LIMIT_KEY)
    return _decode_daily_limit(setting.value)
