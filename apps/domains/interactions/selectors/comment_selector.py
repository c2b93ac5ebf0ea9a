from typing import Optional

from apps.api.common.pagination import PageRequest
from apps.domains.interactions.models import Comment


def get_comment_page(post_id, page_request: PageRequest) -> list[Comment]:
    """Newest first; id breaks ties between comments created in the same instant."""
    qs = (
        Comment.objects.filter(post_id=post_id)
        .select_related("author")
        .order_by("-created_at", "id")
    )
    offset = page_request.offset
    return list(qs[offset : offset + page_request.limit])


def count_comments(post_id) -> int:
    return Comment.objects.filter(post_id=post_id).count()


def get_comment_by_id(comment_id) -> Optional[Comment]:
    return Comment.objects.filter(id=comment_id).first()
