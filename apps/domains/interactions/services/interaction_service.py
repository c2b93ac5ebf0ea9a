"""
Likes and comments on published posts.

A Like row exists exactly while the user likes the post; toggling creates or
hard-deletes it. Concurrent toggles by the same user are last-write-wins; a
unique violation on insert is reported as a conflict.
"""
import logging
from typing import NamedTuple

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from apps.api.common.exceptions import Conflict
from apps.api.common.pagination import PageRequest, build_pagination
from apps.domains.interactions.models import COMMENT_MAX_LENGTH, Comment, Like
from apps.domains.interactions.selectors import (
    count_comments,
    count_likes,
    get_comment_by_id,
    get_comment_page,
)
from apps.domains.posts.models import Post
from apps.domains.posts.sanitizers import strip_markup
from apps.domains.posts.selectors import get_published_post

logger = logging.getLogger(__name__)


class LikeState(NamedTuple):
    is_liked: bool
    likes_count: int


class CommentPage(NamedTuple):
    items: list[Comment]
    pagination: dict


def _require_published_post(post_id) -> Post:
    post = get_published_post(post_id)
    if post is None:
        raise NotFound("Post not found")
    return post


def toggle_like(post_id, user) -> LikeState:
    post = _require_published_post(post_id)

    deleted, _ = Like.objects.filter(post=post, user=user).delete()
    if deleted:
        is_liked = False
    else:
        try:
            with transaction.atomic():
                Like.objects.create(post=post, user=user)
        except IntegrityError as e:
            raise Conflict("Like state changed concurrently, please retry") from e
        is_liked = True

    return LikeState(is_liked=is_liked, likes_count=count_likes(post.id))


def list_comments(post_id, page_request: PageRequest) -> CommentPage:
    post = _require_published_post(post_id)
    items = get_comment_page(post.id, page_request)
    return CommentPage(
        items=items,
        pagination=build_pagination(page_request, count_comments(post.id)),
    )


def create_comment(post_id, user, content: str) -> Comment:
    post = _require_published_post(post_id)
    if not post.allow_comments:
        raise ValidationError("Comments are disabled for this post")

    content = strip_markup(content or "")
    if not content:
        raise ValidationError({"content": ["Comment content cannot be empty."]})
    if len(content) > COMMENT_MAX_LENGTH:
        raise ValidationError({"content": [f"Comment content cannot exceed {COMMENT_MAX_LENGTH} characters."]})

    comment = Comment.objects.create(post=post, author=user, content=content)
    logger.info("comment created id=%s post=%s", comment.id, post.id)
    return comment


def delete_comment(comment_id, user) -> None:
    comment = get_comment_by_id(comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    if comment.author_id != user.pk:
        raise PermissionDenied("You can only delete your own comments")
    comment.delete()
