from rest_framework import serializers

from .models import User


class UserSerializer(serializers.ModelSerializer):

    class Meta:
        model = User
        fields = ["id", "name", "phone_number", "role"]
        read_only_fields = fields


class UserBasicSerializer(serializers.ModelSerializer):
    """
    Lite user representation embedded in ride responses.
    """
    class Meta:
        model = User
        fields = ["id", "name", "phone_number"]


class RegisterSerializer(serializers.Serializer):
    """Serializer for rider/driver registration"""
    name = serializers.CharField(max_length=150)
    phone_number = serializers.CharField(max_length=20)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES)


class LoginSerializer(serializers.Serializer):
    """Serializer for phone-number login"""
    phone_number = serializers.CharField(max_length=20)
