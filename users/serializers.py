from rest_framework import serializers

from .models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Profile summary embedded in presence and conversation read models"""
    id = serializers.CharField(source='user_id', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'avatar_url']


class UserSerializer(serializers.ModelSerializer):
    id = serializers.CharField(source='user_id', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'email', 'avatar_url', 'bio', 'created_at']
        read_only_fields = ['id', 'created_at']
