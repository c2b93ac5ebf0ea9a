import uuid

from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel
from apps.domains.posts.models import Post

COMMENT_MAX_LENGTH = 1000


class Comment(TimestampModel):
    """Plain-text comment on a published post that allows comments."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="comments",
    )
    content = models.CharField(max_length=COMMENT_MAX_LENGTH)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["post", "created_at"], name="comment_post_created_idx"),
        ]
        verbose_name = "Comment"
        verbose_name_plural = "Comments"

    def __str__(self):
        return f"Comment on Post#{self.post_id}"
