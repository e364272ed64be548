from rest_framework import serializers

from users.models import User
from users.serializers import UserSummarySerializer


class PrivateConversationSerializer(serializers.ModelSerializer):
    """A counterpart annotated by get_private_conversations, shaped as a conversation row"""

    id = serializers.CharField(source="user_id", read_only=True)
    user_id = serializers.CharField(read_only=True)
    last_message = serializers.SerializerMethodField()
    last_message_at = serializers.DateTimeField(read_only=True)
    unread_count = serializers.IntegerField(read_only=True)
    profile = UserSummarySerializer(source="*", read_only=True)

    class Meta:
        model = User
        fields = ["id", "user_id", "last_message", "last_message_at", "unread_count", "profile"]

    def get_last_message(self, obj):
        return obj.last_message or ""
