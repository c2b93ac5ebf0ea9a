from typing import NamedTuple

from django.contrib.auth import get_user_model
from rest_framework.exceptions import NotFound, ValidationError

from apps.api.common.pagination import PageRequest, build_pagination
from apps.domains.posts.filters import PostFilter, SortMode
from apps.domains.posts.models import Post
from apps.domains.posts.selectors import get_posts_page_and_total, get_published_post_by_slug


class PostPage(NamedTuple):
    items: list[Post]
    pagination: dict


def list_posts(
    post_filter: PostFilter,
    sort: SortMode,
    page_request: PageRequest,
    *,
    viewer=None,
) -> PostPage:
    items, total = get_posts_page_and_total(post_filter, sort, page_request, viewer=viewer)
    return PostPage(items=items, pagination=build_pagination(page_request, total))


def search_posts(
    query: str,
    page_request: PageRequest,
    *,
    tags=None,
    sort: SortMode = SortMode.NEWEST,
    viewer=None,
) -> tuple[PostPage, str]:
    query = (query or "").strip()
    if not query:
        raise ValidationError({"q": ["Search query is required."]})
    post_filter = PostFilter.build(text=query, tags=tags)
    return list_posts(post_filter, sort, page_request, viewer=viewer), query


def recent_posts(page_request: PageRequest, *, viewer=None) -> PostPage:
    return list_posts(PostFilter(), SortMode.NEWEST, page_request, viewer=viewer)


def user_posts(user_id, page_request: PageRequest, *, viewer=None) -> PostPage:
    """Published posts of one user, newest first."""
    if not get_user_model().objects.filter(pk=user_id).exists():
        raise NotFound("User not found")
    post_filter = PostFilter.build(author_id=user_id)
    return list_posts(post_filter, SortMode.NEWEST, page_request, viewer=viewer)


def author_posts(author, page_request: PageRequest, *, sort: SortMode = SortMode.NEWEST) -> PostPage:
    """The caller's own posts, drafts included."""
    post_filter = PostFilter.build(author_id=author.pk, include_drafts=True)
    return list_posts(post_filter, sort, page_request, viewer=author)


def get_post_for_reader(slug: str, *, viewer=None) -> Post:
    post = get_published_post_by_slug(slug, viewer=viewer)
    if post is None:
        raise NotFound("Post not found")
    return post
