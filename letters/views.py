"""
API Layer — Tree Hole Endpoints (Django REST Framework)

This module exposes the HTTP interface for visitors and for the operator.

Design intent:

Views are thin controllers. Their responsibilities are limited to:

- Pulling raw values out of the request (JSON body, path, headers)
- Delegation to the application use cases
- Translation of domain exceptions into HTTP responses

Architectural decisions:

- No business rules are implemented here; validation lives in
  letters.domain.rules and is triggered by the use cases.
- Every operator view derives from AdminAPIView, which checks the shared
  secret before the handler runs and answers 401 on mismatch.
- Store failures are logged with their traceback and answered with a
  generic message; driver detail never reaches the client.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.response import Response
from rest_framework.views import APIView

from letters.application.admin_gate import ADMIN_TOKEN_HEADER, check_admin_token
from letters.application.settings_store import get_daily_limit, set_daily_limit
from letters.application.use_cases import list_letters, save_reply, submit_letter
from letters.domain.exceptions import (
    QuotaExceeded,
    StoreFailure,
    Unauthorized,
    ValidationError,
)
from letters.domain.rules import parse_daily_limit
from letters.origin import client_origin
from letters.serializers import LetterSerializer

logger = logging.getLogger(__name__)

LETTER_ACCEPTED_MESSAGE = (
    "Your letter is resting safely in the Tree Hole. "
    "Thank you for trusting this space."
)
QUOTA_EXCEEDED_MESSAGE = (
    "You reached today's sharing limit of {limit}. "
    "Please return tomorrow--your feelings matter."
)
SUBMISSION_FAILED_MESSAGE = "The Tree Hole is resting. Please try again soon."


def _json_body(request):
    """Returns the parsed JSON object body, or {} when the body is empty."""
    try:
        data = request.data
    except ParseError as exc:
        raise ValidationError("Request body must be valid JSON.") from exc
    except UnsupportedMediaType as exc:
        raise ValidationError("Request body must be JSON.") from exc
    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def _error(message, status_code):
    return Response({"error": message}, status=status_code)


def _store_failure(message):
    logger.exception(message)
    return _error(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


class LetterSubmissionView(APIView):
    """
    POST /api/letters

    Accepts an anonymous letter, subject to the per-origin daily quota.
    """

    def post(self, request):
        try:
            payload = _json_body(request)
            submit_letter(payload.get("content"), client_origin(request))
        except ValidationError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        except QuotaExceeded as exc:
            return _error(
                QUOTA_EXCEEDED_MESSAGE.format(limit=exc.limit),
                status.HTTP_429_TOO_MANY_REQUESTS,
            )
        except StoreFailure:
            logger.exception("Failed to save letter")
            return _error(
                SUBMISSION_FAILED_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(
            {"message": LETTER_ACCEPTED_MESSAGE}, status=status.HTTP_200_OK
        )


class PublicSettingsView(APIView):
    """GET /api/settings/public"""

    def get(self, request):
        try:
            daily_limit = get_daily_limit()
        except StoreFailure:
            return _store_failure("Unable to load public settings.")

        return Response({"dailyLimit": daily_limit}, status=status.HTTP_200_OK)


class AdminAPIView(APIView):
    """Base view for operator endpoints: every request must carry the secret."""

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        check_admin_token(request.headers.get(ADMIN_TOKEN_HEADER))

    def handle_exception(self, exc):
        if isinstance(exc, Unauthorized):
            return _error(str(exc), status.HTTP_401_UNAUTHORIZED)
        return super().handle_exception(exc)


class AdminLetterListView(AdminAPIView):
    """GET /api/admin/letters"""

    def get(self, request):
        try:
            letters = list_letters()
        except StoreFailure:
            return _store_failure("Unable to load letters.")

        serializer = LetterSerializer(letters, many=True)
        return Response({"letters": serializer.data}, status=status.HTTP_200_OK)


class AdminReplyView(AdminAPIView):
    """
    POST /api/admin/letters/<id>/reply

    Sets the reply of a letter, or clears it when replyText is blank.
    """

    def post(self, request, letter_id):
        try:
            payload = _json_body(request)
            save_reply(letter_id, payload.get("replyText"))
        except ValidationError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        except StoreFailure:
            return _store_failure("Unable to save reply.")

        return Response({"message": "Reply saved."}, status=status.HTTP_200_OK)


class AdminSettingsView(AdminAPIView):
    """GET /api/admin/settings"""

    def get(self, request):
        try:
            daily_limit = get_daily_limit()
        except StoreFailure:
            return _store_failure("Unable to load settings.")

        return Response({"dailyLimit": daily_limit}, status=status.HTTP_200_OK)


class AdminDailyLimitView(AdminAPIView):
    """POST /api/admin/settings/daily-limit"""

    def post(self, request):
        try:
            payload = _json_body(request)
            daily_limit = parse_daily_limit(payload.get("dailyLimit"))
            set_daily_limit(daily_limit)
        except ValidationError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        except StoreFailure:
            return _store_failure("Unable to update daily limit.")

        return Response(
            {"message": "Daily limit updated.", "dailyLimit": daily_limit},
            status=status.HTTP_200_OK,
        )
