"""
Typed read filter for posts.

A ``PostFilter`` is built once per request and handed unchanged to the
selectors, which turn it into a single ``Q`` predicate used by both the page
query and the count query.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from django.db import models
from django.db.models import Q

from apps.domains.posts.models import PostTag


class SortMode(models.TextChoices):
    NEWEST = "newest", "Newest first"
    OLDEST = "oldest", "Oldest first"
    POPULAR = "popular", "Most engagement"

    @classmethod
    def parse(cls, raw, default: "SortMode" = None) -> "SortMode":
        default = default or cls.NEWEST
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return default


class FilterKind(enum.Enum):
    NONE = "none"
    TEXT_SEARCH = "text_search"
    TAG_SUBSET = "tag_subset"
    BOTH = "both"


def normalize_tags(tags: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Strip, drop empties, de-duplicate; first occurrence wins."""
    seen = []
    for tag in tags or ():
        tag = (tag or "").strip()
        if tag and tag not in seen:
            seen.append(tag)
    return tuple(seen)


@dataclass(frozen=True)
class PostFilter:
    text: Optional[str] = None
    tags: tuple[str, ...] = ()
    author_id: Optional[object] = None
    include_drafts: bool = False

    @classmethod
    def build(cls, *, text=None, tags=None, author_id=None, include_drafts=False) -> "PostFilter":
        text = (text or "").strip() or None
        return cls(
            text=text,
            tags=normalize_tags(tags),
            author_id=author_id,
            include_drafts=include_drafts,
        )

    @property
    def kind(self) -> FilterKind:
        if self.text and self.tags:
            return FilterKind.BOTH
        if self.text:
            return FilterKind.TEXT_SEARCH
        if self.tags:
            return FilterKind.TAG_SUBSET
        return FilterKind.NONE

    def to_q(self) -> Q:
        predicate = Q() if self.include_drafts else Q(published=True)

        if self.author_id is not None:
            predicate &= Q(author_id=self.author_id)

        if self.kind in (FilterKind.TEXT_SEARCH, FilterKind.BOTH):
            predicate &= (
                Q(title__icontains=self.text)
                | Q(content__icontains=self.text)
                | Q(id__in=PostTag.objects.filter(name=self.text).values("post_id"))
            )

        if self.kind in (FilterKind.TAG_SUBSET, FilterKind.BOTH):
            # "has any of": one matching tag is enough
            predicate &= Q(id__in=PostTag.objects.filter(name__in=self.tags).values("post_id"))

        return predicate
