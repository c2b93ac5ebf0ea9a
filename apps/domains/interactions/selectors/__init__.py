from .comment_selector import get_comment_page, count_comments, get_comment_by_id
from .like_selector import count_likes, has_liked

__all__ = [
    "get_comment_page",
    "count_comments",
    "get_comment_by_id",
    "count_likes",
    "has_liked",
]
