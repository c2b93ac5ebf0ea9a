from typing import Optional

from django.db.models import Exists, OuterRef, QuerySet

from apps.api.common.pagination import PageRequest
from apps.domains.interactions.models import Like
from apps.domains.posts.filters import PostFilter, SortMode
from apps.domains.posts.models import Post
from apps.domains.posts.ranking import rank, with_engagement


def _is_authenticated(viewer) -> bool:
    return viewer is not None and getattr(viewer, "is_authenticated", False)


def base_post_queryset(viewer=None) -> QuerySet:
    """Post + author + tags. is_liked is annotated only for an authenticated viewer."""
    qs = Post.objects.select_related("author").prefetch_related("post_tags")
    if _is_authenticated(viewer):
        qs = qs.annotate(
            is_liked=Exists(Like.objects.filter(post_id=OuterRef("pk"), user_id=viewer.pk))
        )
    return qs


def get_post_page(
    post_filter: PostFilter,
    sort: SortMode,
    page_request: PageRequest,
    *,
    viewer=None,
) -> list[Post]:
    """Ordering runs in the database over the whole candidate set, then slices."""
    qs = rank(base_post_queryset(viewer).filter(post_filter.to_q()), sort)
    offset = page_request.offset
    return list(qs[offset : offset + page_request.limit])


def count_posts(post_filter: PostFilter) -> int:
    # same predicate as get_post_page
    return Post.objects.filter(post_filter.to_q()).count()


def get_posts_page_and_total(
    post_filter: PostFilter,
    sort: SortMode,
    page_request: PageRequest,
    *,
    viewer=None,
) -> tuple[list[Post], int]:
    return (
        get_post_page(post_filter, sort, page_request, viewer=viewer),
        count_posts(post_filter),
    )


def get_published_post_by_slug(slug: str, *, viewer=None) -> Optional[Post]:
    return (
        with_engagement(base_post_queryset(viewer))
        .filter(slug=slug, published=True)
        .first()
    )


def get_post_by_id(post_id, *, viewer=None) -> Optional[Post]:
    """Single post, drafts included. Used on the author's write paths."""
    return with_engagement(base_post_queryset(viewer)).filter(id=post_id).first()


def get_published_post(post_id) -> Optional[Post]:
    return Post.objects.filter(id=post_id, published=True).first()


def slug_exists(slug: str, *, exclude_post_id=None) -> bool:
    qs = Post.objects.filter(slug=slug)
    if exclude_post_id is not None:
        qs = qs.exclude(id=exclude_post_id)
    return qs.exists()
