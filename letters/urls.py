from django.urls import path

from .views import (
    AdminDailyLimitView,
    AdminLetterListView,
    AdminReplyView,
    AdminSettingsView,
    LetterSubmissionView,
    PublicSettingsView,
)

urlpatterns = [
    path("letters", LetterSubmissionView.as_view(), name="submit-letter"),
    path("settings/public", PublicSettingsView.as_view(), name="public-settings"),
    path("admin/letters", AdminLetterListView.as_view(), name="admin-letters"),
    path(
        "admin/letters/<str:letter_id>/reply",
        AdminReplyView.as_view(),
        name="admin-reply",
    ),
    path("admin/settings", AdminSettingsView.as_view(), name="admin-settings"),
    path(
        "admin/settings/daily-limit",
        AdminDailyLimitView.as_view(),
        name="admin-daily-limit",
    ),
]
