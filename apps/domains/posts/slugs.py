"""
Title -> URL slug, and the collision loop that keeps slugs globally unique.

The unique index on ``Post.slug`` is the real guarantee: two requests can both
see a slug as free. Writers catch the resulting IntegrityError and report a
duplicate title instead of looping.
"""
import re
from typing import Callable, Optional

from apps.domains.posts.selectors import slug_exists

_DISALLOWED = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")

FALLBACK_SLUG = "post"

# path segments routed to list actions ahead of the slug lookup
RESERVED_SLUGS = frozenset({"recent", "tags", "search", "mine", "images"})


def generate_slug(title: str) -> str:
    slug = title.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def ensure_unique_slug(
    candidate: str,
    exclude_post_id=None,
    *,
    exists: Optional[Callable[..., bool]] = None,
) -> str:
    """
    Return ``candidate`` or the first free ``candidate-N`` (N = 1, 2, ...).

    ``exclude_post_id`` lets a post keep its own slug on update. Names in
    ``RESERVED_SLUGS`` are never returned as-is.
    """
    exists = exists or slug_exists
    base = candidate or FALLBACK_SLUG
    slug = base
    counter = 1
    while slug in RESERVED_SLUGS or exists(slug, exclude_post_id=exclude_post_id):
        slug = f"{base}-{counter}"
        counter += 1
    return slug
