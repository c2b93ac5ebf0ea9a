# JWT issue: email login is case-insensitive (stored lowercase at signup).
from __future__ import annotations

from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.views import TokenObtainPairView

from apps.core.serializers import UserSerializer


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """email + password -> {refresh, access, user}."""

    def validate(self, attrs):
        attrs[self.username_field] = (attrs.get(self.username_field) or "").strip().lower()
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        return data


class EmailTokenObtainPairView(TokenObtainPairView):
    serializer_class = EmailTokenObtainPairSerializer
