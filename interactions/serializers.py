from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import Block


class BlockRequestSerializer(serializers.Serializer):
    blocker_id = serializers.CharField(max_length=100, required=False)
    blocked_id = serializers.CharField(max_length=100)


class BlockSerializer(serializers.ModelSerializer):
    blocked = UserSummarySerializer(read_only=True)

    class Meta:
        model = Block
        fields = ['id', 'blocker_id', 'blocked', 'created_at']
        read_only_fields = ['id', 'blocker_id', 'created_at']
