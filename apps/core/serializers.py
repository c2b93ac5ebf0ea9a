# apps/core/serializers.py

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

User = get_user_model()


def _normalize_email(value: str) -> str:
    return (value or "").strip().lower()


class PreferenceTagsField(serializers.ListField):
    child = serializers.CharField(max_length=50)

    def to_internal_value(self, data):
        tags = super().to_internal_value(data)
        return list(dict.fromkeys(t.strip() for t in tags if t.strip()))


# ------------------------------------
# User Base
# ------------------------------------

class AuthorSerializer(serializers.ModelSerializer):
    """Embedded author on posts and comments."""

    class Meta:
        model = User
        fields = ["id", "full_name", "avatar", "bio"]


class UserSerializer(serializers.ModelSerializer):
    tags = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "avatar",
            "bio",
            "tags",
            "is_verified",
            "date_joined",
            "updated_at",
        ]

    def get_tags(self, obj):
        preference = getattr(obj, "preference", None)
        return list(preference.tags) if preference else []


class PublicProfileSerializer(serializers.ModelSerializer):
    joined_at = serializers.DateTimeField(source="date_joined", read_only=True)
    posts_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = User
        fields = ["id", "full_name", "avatar", "bio", "joined_at", "posts_count"]


# ------------------------------------
# Register
# ------------------------------------

class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8, max_length=128)
    full_name = serializers.CharField(min_length=2, max_length=100)
    tags = PreferenceTagsField(required=False, default=list)

    def validate_email(self, value):
        return _normalize_email(value)

    def validate(self, attrs):
        candidate = User(email=attrs["email"], full_name=attrs["full_name"])
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({"password": list(e.messages)})
        return attrs


# ------------------------------------
# Verification / password reset
# ------------------------------------

class EmailOnlySerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return _normalize_email(value)


class VerifyEmailSerializer(EmailOnlySerializer):
    code = serializers.RegexField(r"^\d{6}$", max_length=6)


class ResetPasswordSerializer(EmailOnlySerializer):
    code = serializers.RegexField(r"^\d{6}$", max_length=6)
    password = serializers.CharField(write_only=True, min_length=8, max_length=128)

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value


# ------------------------------------
# Profile
# ------------------------------------

class ProfileUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(min_length=2, max_length=100, required=False)
    email = serializers.EmailField(required=False)
    bio = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True, allow_null=True)
    tags = PreferenceTagsField(required=False)

    def validate_email(self, value):
        return _normalize_email(value)


class AvatarUploadSerializer(serializers.Serializer):
    avatar = serializers.FileField()
