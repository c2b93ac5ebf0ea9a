from django.db import models

from .post import Post


class PostTag(models.Model):
    """One tag on one post. ``position`` keeps the author's display order."""
    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="post_tags",
    )
    name = models.CharField(max_length=50, db_index=True)
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]
        constraints = [
            models.UniqueConstraint(fields=["post", "name"], name="unique_tag_per_post"),
        ]
        verbose_name = "Post Tag"
        verbose_name_plural = "Post Tags"

    def __str__(self):
        return self.name
