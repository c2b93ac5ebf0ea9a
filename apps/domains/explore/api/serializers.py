from django.conf import settings
from rest_framework import serializers

from apps.domains.interactions.api.serializers import CommentAuthorSerializer
from apps.domains.posts.models import Post
from apps.domains.posts.sanitizers import make_excerpt


class PostSummarySerializer(serializers.ModelSerializer):
    excerpt = serializers.SerializerMethodField()
    tags = serializers.ListField(child=serializers.CharField(), read_only=True)
    author = CommentAuthorSerializer(read_only=True)
    stats = serializers.SerializerMethodField()
    is_liked = serializers.BooleanField(read_only=True)

    class Meta:
        model = Post
        fields = ["id", "title", "excerpt", "slug", "tags", "published_at", "author", "stats", "is_liked"]

    def get_excerpt(self, obj):
        return make_excerpt(obj.content, settings.EXPLORE_EXCERPT_LENGTH)

    def get_stats(self, obj):
        return {
            "likes_count": getattr(obj, "likes_count", 0),
            "comments_count": getattr(obj, "comments_count", 0),
        }
