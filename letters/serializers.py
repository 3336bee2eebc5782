from rest_framework import serializers

from letters.models import Letter


class LetterSerializer(serializers.ModelSerializer):
    """Admin wire shape of a letter; origin keeps its historic ip_address name."""

    ip_address = serializers.CharField(source="origin", read_only=True)

    class Meta:
        model = Letter
        fields = [
            "id",
            "content",
            "ip_address",
            "created_at",
            "reply_text",
            "reply_created_at",
        ]
        read_only_fields = fields
