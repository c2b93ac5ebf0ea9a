from .post_selector import (
    base_post_queryset,
    get_post_page,
    count_posts,
    get_posts_page_and_total,
    get_published_post_by_slug,
    get_post_by_id,
    get_published_post,
    slug_exists,
)
from .tag_selector import get_all_tags, get_popular_tags

__all__ = [
    "base_post_queryset",
    "get_post_page",
    "count_posts",
    "get_posts_page_and_total",
    "get_published_post_by_slug",
    "get_post_by_id",
    "get_published_post",
    "slug_exists",
    "get_all_tags",
    "get_popular_tags",
]
