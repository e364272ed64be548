from rest_framework import serializers

from users.models import User


class PresenceRequestSerializer(serializers.Serializer):
    userId = serializers.CharField(max_length=100, required=False, allow_blank=True)


class OnlineParticipantSerializer(serializers.ModelSerializer):
    id = serializers.CharField(source="user_id", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "avatar_url"]
