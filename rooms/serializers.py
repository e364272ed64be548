from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import Room, RoomParticipant


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "name", "description", "type", "created_at"]
        read_only_fields = ["id", "created_at"]


class RoomParticipantSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = RoomParticipant
        fields = ["room_id", "user", "joined_at"]


class JoinRoomSerializer(serializers.Serializer):
    userId = serializers.CharField(max_length=100, required=False)


class UserRoomSerializer(serializers.ModelSerializer):
    """A room seen through one user's membership row"""

    id = serializers.IntegerField(source="room.id", read_only=True)
    name = serializers.CharField(source="room.name", read_only=True)
    description = serializers.CharField(source="room.description", read_only=True)
    type = serializers.CharField(source="room.type", read_only=True)
    created_at = serializers.DateTimeField(source="room.created_at", read_only=True)

    class Meta:
        model = RoomParticipant
        fields = ["id", "name", "description", "type", "created_at", "joined_at"]
