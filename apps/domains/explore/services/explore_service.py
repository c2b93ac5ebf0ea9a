"""
Explore / recommendations.

Tag source, in priority order: explicit request tags, the viewer's stored
preference tags, none (global). Ordering is always engagement-weighted.
"""
from typing import NamedTuple

from django.conf import settings

from apps.api.common.pagination import PageRequest
from apps.core.models import UserPreference
from apps.domains.posts.filters import PostFilter, SortMode
from apps.domains.posts.selectors import get_popular_tags
from apps.domains.posts.services.listing_service import PostPage, list_posts


class ExploreResult(NamedTuple):
    page: PostPage
    available_tags: list[str]
    applied_tags: tuple[str, ...]


def preference_tags_for(viewer) -> list[str]:
    if viewer is None or not getattr(viewer, "is_authenticated", False):
        return []
    tags = (
        UserPreference.objects.filter(user_id=viewer.pk)
        .values_list("tags", flat=True)
        .first()
    )
    return list(tags or [])


def explore(page_request: PageRequest, *, tags=None, viewer=None) -> ExploreResult:
    post_filter = PostFilter.build(tags=tags)
    if not post_filter.tags:
        post_filter = PostFilter.build(tags=preference_tags_for(viewer))

    page = list_posts(post_filter, SortMode.POPULAR, page_request, viewer=viewer)
    return ExploreResult(
        page=page,
        available_tags=get_popular_tags(settings.EXPLORE_TAG_LIMIT),
        applied_tags=post_filter.tags,
    )
