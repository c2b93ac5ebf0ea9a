from django.db.models import Count

from apps.domains.posts.models import PostTag


def get_all_tags() -> list[str]:
    """Distinct tags across published posts, sorted lexicographically."""
    return list(
        PostTag.objects.filter(post__published=True)
        .order_by("name")
        .values_list("name", flat=True)
        .distinct()
    )


def get_popular_tags(limit: int) -> list[str]:
    """Most frequent tags across published posts; ties broken by name."""
    return list(
        PostTag.objects.filter(post__published=True)
        .values("name")
        .annotate(occurrences=Count("id"))
        .order_by("-occurrences", "name")
        .values_list("name", flat=True)[:limit]
    )
