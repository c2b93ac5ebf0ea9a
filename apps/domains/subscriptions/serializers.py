from rest_framework import serializers

from .models import EmailSubscription


class SubscribeSerializer(serializers.Serializer):
    email = serializers.EmailField()


class EmailSubscriptionSerializer(serializers.ModelSerializer):
    subscribed_at = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = EmailSubscription
        fields = ["id", "email", "is_active", "subscribed_at"]
