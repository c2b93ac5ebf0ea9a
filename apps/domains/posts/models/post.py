import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.api.common.models import TimestampModel


class Post(TimestampModel):
    """Published or draft article. Publicly visible only while published."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="posts",
    )
    title = models.CharField(max_length=200)
    content = models.TextField()
    slug = models.SlugField(max_length=255, unique=True)
    featured_image = models.URLField(max_length=500, blank=True, null=True)
    allow_comments = models.BooleanField(default=True)
    published = models.BooleanField(default=False)
    published_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["published", "published_at"], name="post_published_idx"),
            models.Index(fields=["author", "published"], name="post_author_published_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(published=True, published_at__isnull=False)
                    | Q(published=False, published_at__isnull=True)
                ),
                name="post_published_at_iff_published",
            ),
        ]
        verbose_name = "Post"
        verbose_name_plural = "Posts"

    def __str__(self):
        return self.title

    @property
    def tags(self) -> list[str]:
        return [tag.name for tag in self.post_tags.all()]
