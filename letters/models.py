"""
Persistence Models — Letters Domain (Django ORM)

This module defines the two record kinds the Tree Hole persists: anonymous
letters and key/value settings.

Design intent:

The table layout (``letters`` and ``settings``) and the ``daily_limit``
setting key are part of the stored contract and stay stable across
versions, so both models pin their table and column names explicitly.

Key architectural decisions:

- Letter.origin groups submissions for the daily quota. It is stored in the
  ``ip_address`` column and indexed together with created_at, which is the
  exact shape of the per-day count.
- The reply pair (reply_text, reply_created_at) is guarded by a CHECK
  constraint: both NULL or both set. The application never writes one
  without the other, and the database refuses it if anything else does.
- Setting uses its key as the primary key, so "exactly one row per key" is
  enforced by the database and duplicate default inserts surface as
  IntegrityError, which the settings store absorbs.
"""

from django.db import models
from django.db.models import Q

ORIGIN_MAX_LENGTH = 64


class Letter(models.Model):
    """
    An anonymous message submitted by a visitor.

    content and created_at are written once at insertion. Only the reply
    pair changes afterwards, and only through the reply use case.
    """

    content = models.TextField()

    origin = models.CharField(
        max_length=ORIGIN_MAX_LENGTH,
        db_column="ip_address",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    reply_text = models.TextField(null=True, blank=True)
    reply_created_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "letters"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["origin", "created_at"],
                name="letters_origin_created_idx",
            ),
        ]
        constraints = [
            # Reply timestamp is present iff reply text is present.
            models.CheckConstraint(
                condition=(
                    Q(reply_text__isnull=True, reply_created_at__isnull=True)
                    | Q(reply_text__isnull=False, reply_created_at__isnull=False)
                ),
                name="letters_reply_pair_consistent",
            ),
        ]

    def __str__(self):
        return f"Letter {self.id} - {self.content[:40]}"


class Setting(models.Model):
    """A string-encoded configuration value, one row per key."""

    key = models.CharField(max_length=64, primary_key=True)
    value = models.CharField(max_length=255)

    class Meta:
        db_table = "settings"

    def __str__(self):
        return f"{self.key} = {self.value}"
