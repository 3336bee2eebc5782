from datetime import timedelta
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from letters.application.settings_store import DAILY_LIMIT_KEY
from letters.models import Letter, Setting


class SubmitLetterEndpointTest(TestCase):
    """
    Tests for POST /api/letters

    Each test runs inside a transaction that is rolled back automatically,
    ensuring full isolation between test cases.
    """

    def setUp(self):
        self.client = APIClient()
        Setting.objects.create(key=DAILY_LIMIT_KEY, value="1")

    def submit(self, content, origin="203.0.113.7"):
        return self.client.post(
            "/api/letters",
            {"content": content},
            format="json",
            HTTP_X_FORWARDED_FOR=origin,
        )

    def test_successful_submission(self):
        response = self.submit("I had a long day today.")

        self.assertEqual(response.status_code, 200)
        self.assertIn("resting safely", response.data["message"])

        letter = Letter.objects.get()
        self.assertEqual(letter.content, "I had a long day today.")
        self.assertEqual(letter.origin, "203.0.113.7")
        self.assertIsNone(letter.reply_text)
        self.assertIsNone(letter.reply_created_at)

    def test_content_is_stored_trimmed(self):
        response = self.submit("   exactly ten   ")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Letter.objects.get().content, "exactly ten")

    def test_ten_trimmed_characters_are_accepted(self):
        response = self.submit("  abcdefghij  ")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Letter.objects.get().content, "abcdefghij")

    def test_nine_trimmed_characters_are_rejected(self):
        response = self.submit("  abcdefghi          ")

        self.assertEqual(response.status_code, 400)
        self.assertIn("at least 10 characters", response.data["error"])
        self.assertEqual(Letter.objects.count(), 0)

    def test_missing_content_returns_400(self):
        response = self.client.post("/api/letters", {}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(Letter.objects.count(), 0)

    def test_non_text_content_returns_400(self):
        response = self.submit(12345678901234)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(Letter.objects.count(), 0)

    def test_malformed_json_returns_400(self):
        response = self.client.post(
            "/api/letters", data="{not json", content_type="application/json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.data)

    def test_multipart_body_returns_400(self):
        response = self.client.post(
            "/api/letters", {"content": "a form posted letter"}, format="multipart"
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.data)
        self.assertEqual(Letter.objects.count(), 0)

    def test_plain_text_body_returns_400(self):
        response = self.client.post(
            "/api/letters", data="hello there friend", content_type="text/plain"
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.data)
        self.assertEqual(Letter.objects.count(), 0)

    def test_second_letter_same_day_hits_quota(self):
        """Quota 1: origin A once -> 200, again -> 429, origin B -> 200."""
        first = self.submit("twelve chars", origin="198.51.100.1")
        self.assertEqual(first.status_code, 200)

        second = self.submit("twelve chars", origin="198.51.100.1")
        self.assertEqual(second.status_code, 429)
        self.assertIn("sharing limit of 1", second.data["error"])

        other = self.submit("twelve chars", origin="198.51.100.2")
        self.assertEqual(other.status_code, 200)

        self.assertEqual(Letter.objects.filter(origin="198.51.100.1").count(), 1)
        self.assertEqual(Letter.objects.filter(origin="198.51.100.2").count(), 1)

    def test_rejected_submission_writes_nothing(self):
        self.submit("first letter of the day")
        self.submit("second letter of the day")

        self.assertEqual(Letter.objects.count(), 1)

    def test_letters_from_yesterday_do_not_count(self):
        old = Letter.objects.create(content="yesterday's words", origin="203.0.113.7")
        Letter.objects.filter(pk=old.pk).update(
            created_at=timezone.now() - timedelta(days=1)
        )

        response = self.submit("a brand new day")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Letter.objects.count(), 2)

    def test_raised_limit_allows_more_letters(self):
        Setting.objects.filter(key=DAILY_LIMIT_KEY).update(value="3")

        statuses = [
            self.submit(f"letter number {i}").status_code for i in range(4)
        ]

        self.assertEqual(statuses, [200, 200, 200, 429])
        self.assertEqual(Letter.objects.count(), 3)

    def test_malformed_limit_falls_back_to_default(self):
        Setting.objects.filter(key=DAILY_LIMIT_KEY).update(value="many")

        self.assertEqual(self.submit("first letter today").status_code, 200)
        self.assertEqual(self.submit("second letter today").status_code, 429)

    def test_origin_falls_back_to_remote_address(self):
        response = self.client.post(
            "/api/letters", {"content": "no proxy in front"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(Letter.objects.get().origin, "127.0.0.1")

    def test_store_failure_returns_generic_500(self):
        with mock.patch.object(
            Letter.objects, "create", side_effect=DatabaseError("disk I/O error")
        ):
            response = self.submit("this will not be stored")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.data["error"], "The Tree Hole is resting. Please try again soon."
        )
        self.assertNotIn("disk", response.data["error"])
        self.assertEqual(Letter.objects.count(), 0)


class PublicSettingsEndpointTest(TestCase):
    """Tests for GET /api/settings/public"""

    def setUp(self):
        self.client = APIClient()

    def test_default_limit_is_materialised(self):
        response = self.client.get("/api/settings/public")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"dailyLimit": 1})
        self.assertEqual(Setting.objects.get(key=DAILY_LIMIT_KEY).value, "1")

    def test_returns_configured_limit(self):
        Setting.objects.create(key=DAILY_LIMIT_KEY, value="4")

        response = self.client.get("/api/settings/public")

        self.assertEqual(response.data["dailyLimit"], 4)

    def test_store_failure_returns_500(self):
        with mock.patch.object(
            Setting.objects, "get_or_create", side_effect=DatabaseError("gone")
        ):
            response = self.client.get("/api/settings/public")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"], "Unable to load public settings.")
