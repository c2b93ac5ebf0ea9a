"""
Ordering of post result sets.

Counts and the engagement score are annotations, so the database orders the
whole candidate set before the selector slices a page out of it.
"""
from django.db.models import Count, F, QuerySet

from apps.domains.posts.filters import SortMode

LIKE_WEIGHT = 2
COMMENT_WEIGHT = 1


def with_engagement(qs: QuerySet) -> QuerySet:
    return qs.annotate(
        likes_count=Count("likes", distinct=True),
        comments_count=Count("comments", distinct=True),
    ).annotate(
        engagement_score=F("likes_count") * LIKE_WEIGHT + F("comments_count") * COMMENT_WEIGHT,
    )


def ordering_for(sort: SortMode) -> tuple:
    # id is the final tie-break so equal keys still page deterministically
    if sort == SortMode.OLDEST:
        return (F("published_at").asc(nulls_last=True), "id")
    if sort == SortMode.POPULAR:
        return ("-engagement_score", F("published_at").desc(nulls_last=True), "id")
    return (F("published_at").desc(nulls_last=True), "id")


def rank(qs: QuerySet, sort: SortMode) -> QuerySet:
    return with_engagement(qs).order_by(*ordering_for(sort))


def engagement_score(likes_count: int, comments_count: int) -> int:
    return likes_count * LIKE_WEIGHT + comments_count * COMMENT_WEIGHT
