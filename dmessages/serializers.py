from rest_framework import serializers

from .models import PrivateMessage


class PrivateMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = PrivateMessage
        fields = ["id", "sender_id", "receiver_id", "content", "created_at", "is_read"]
        read_only_fields = fields


class SendPrivateMessageSerializer(serializers.Serializer):
    sender_id = serializers.CharField(max_length=100, required=False)
    receiver_id = serializers.CharField(max_length=100)
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class MarkAsReadSerializer(serializers.Serializer):
    senderId = serializers.CharField(max_length=100)
    receiverId = serializers.CharField(max_length=100, required=False)
