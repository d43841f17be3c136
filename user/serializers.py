# user/serializers.py
import re

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User

PHONE_RE = re.compile(r"^\+?[0-9]{7,15}$")


class SignupSerializer(serializers.ModelSerializer):
    password1 = serializers.CharField(write_only=True)
    password2 = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ["email", "name", "phone_number", "password1", "password2"]
        extra_kwargs = {"phone_number": {"required": False}}

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already exists")
        return value

    def validate_phone_number(self, value):
        if value and not PHONE_RE.match(value):
            raise serializers.ValidationError("Enter a valid phone number")
        return value

    def validate(self, attrs):
        if attrs["password1"] != attrs["password2"]:
            raise serializers.ValidationError({"password2": "Passwords do not match"})
        validate_password(attrs["password1"])
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password1")
        validated_data.pop("password2")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "name", "phone_number", "is_staff"]


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "email", "name", "phone_number"]
        read_only_fields = ["id", "email"]

    def validate_phone_number(self, value):
        if value and not PHONE_RE.match(value):
            raise serializers.ValidationError("Enter a valid phone number")
        return value


class UserBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name"]
