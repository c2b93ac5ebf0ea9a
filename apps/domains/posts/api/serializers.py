from rest_framework import serializers

from apps.api.common.pagination import parse_csv
from apps.core.serializers import AuthorSerializer
from apps.domains.posts.models import Post


class TagListField(serializers.ListField):
    """Accepts a JSON list, repeated form fields, or a comma-joined string."""

    child = serializers.CharField(max_length=50)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = parse_csv(data)
        elif isinstance(data, (list, tuple)):
            flat = []
            for item in data:
                flat.extend(parse_csv(item) if isinstance(item, str) else [item])
            data = flat
        return super().to_internal_value(data)


# ------------------------------------
# Read
# ------------------------------------

class PostSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)
    tags = serializers.ListField(child=serializers.CharField(), read_only=True)
    likes_count = serializers.IntegerField(read_only=True, default=0)
    comments_count = serializers.IntegerField(read_only=True, default=0)
    is_liked = serializers.BooleanField(read_only=True)

    class Meta:
        model = Post
        fields = [
            "id",
            "title",
            "content",
            "slug",
            "featured_image",
            "author",
            "allow_comments",
            "tags",
            "published",
            "published_at",
            "created_at",
            "updated_at",
            "likes_count",
            "comments_count",
            "is_liked",
        ]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # anonymous readers never see is_liked
        if not hasattr(instance, "is_liked"):
            data.pop("is_liked", None)
        return data


# ------------------------------------
# Write
# ------------------------------------

class PostCreateSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=3, max_length=200)
    content = serializers.CharField(trim_whitespace=False)
    featured_image = serializers.URLField(max_length=500, required=False, allow_null=True, allow_blank=True)
    allow_comments = serializers.BooleanField(default=True)
    tags = TagListField(required=False, default=list)
    published = serializers.BooleanField(default=False)

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title cannot be blank.")
        return value


class PostUpdateSerializer(serializers.Serializer):
    """Every field optional; absent keys are left untouched."""

    title = serializers.CharField(min_length=3, max_length=200, required=False)
    content = serializers.CharField(required=False, trim_whitespace=False)
    featured_image = serializers.URLField(max_length=500, required=False, allow_null=True, allow_blank=True)
    allow_comments = serializers.BooleanField(required=False)
    tags = TagListField(required=False)
    published = serializers.BooleanField(required=False)


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()
