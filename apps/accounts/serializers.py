from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Administrator profile."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'display_name',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for administrator login."""

    username = serializers.CharField(max_length=150)
    password = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )
