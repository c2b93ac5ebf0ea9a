from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.domains.interactions.models import COMMENT_MAX_LENGTH, Comment


class CommentAuthorSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = ["id", "full_name", "avatar"]


class CommentSerializer(serializers.ModelSerializer):
    author = CommentAuthorSerializer(read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "content", "author", "created_at", "updated_at"]


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=COMMENT_MAX_LENGTH)
