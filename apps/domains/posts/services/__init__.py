from .post_service import PostService
from .listing_service import (
    list_posts,
    search_posts,
    recent_posts,
    user_posts,
    author_posts,
    get_post_for_reader,
)

__all__ = [
    "PostService",
    "list_posts",
    "search_posts",
    "recent_posts",
    "user_posts",
    "author_posts",
    "get_post_for_reader",
]
