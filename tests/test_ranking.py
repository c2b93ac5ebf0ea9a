from datetime import timedelta

import pytest
from django.utils import timezone

from apps.api.common.pagination import PageRequest
from apps.domains.interactions.models import Comment, Like
from apps.domains.posts.filters import FilterKind, PostFilter, SortMode
from apps.domains.posts.models import Post
from apps.domains.posts.ranking import engagement_score
from apps.domains.posts.selectors import get_post_page


def _set_published_at(post, when):
    Post.objects.filter(id=post.id).update(published_at=when)


def test_filter_kind():
    assert PostFilter.build().kind is FilterKind.NONE
    assert PostFilter.build(text="  grace ").kind is FilterKind.TEXT_SEARCH
    assert PostFilter.build(tags=["faith", " ", "faith"]).kind is FilterKind.TAG_SUBSET
    assert PostFilter.build(text="grace", tags=["faith"]).kind is FilterKind.BOTH


def test_filter_normalises_tags_and_text():
    post_filter = PostFilter.build(text="   ", tags=[" faith", "hope ", "faith", ""])

    assert post_filter.text is None
    assert post_filter.tags == ("faith", "hope")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("popular", SortMode.POPULAR),
        ("OLDEST", SortMode.OLDEST),
        (None, SortMode.NEWEST),
        ("random", SortMode.NEWEST),
    ],
)
def test_sort_mode_parse(raw, expected):
    assert SortMode.parse(raw) == expected


def test_engagement_score_weights_likes_double():
    assert engagement_score(5, 0) == 10
    assert engagement_score(0, 8) == 8


@pytest.mark.django_db
def test_popular_ranks_likes_above_comments_regardless_of_recency(make_post, make_user):
    liked = make_post("Liked long ago")
    discussed = make_post("Discussed recently")
    now = timezone.now()
    _set_published_at(liked, now - timedelta(days=30))
    _set_published_at(discussed, now)

    for _ in range(5):
        Like.objects.create(post=liked, user=make_user())
    commenter = make_user()
    for i in range(8):
        Comment.objects.create(post=discussed, author=commenter, content=f"comment {i}")

    page = get_post_page(PostFilter(), SortMode.POPULAR, PageRequest.build(1, 10))

    assert [p.id for p in page] == [liked.id, discussed.id]
    assert (page[0].likes_count, page[0].comments_count, page[0].engagement_score) == (5, 0, 10)
    assert (page[1].likes_count, page[1].comments_count, page[1].engagement_score) == (0, 8, 8)


@pytest.mark.django_db
def test_popular_ties_fall_back_to_newest(make_post):
    older = make_post("Older")
    newer = make_post("Newer")
    now = timezone.now()
    _set_published_at(older, now - timedelta(hours=1))
    _set_published_at(newer, now)

    page = get_post_page(PostFilter(), SortMode.POPULAR, PageRequest.build(1, 10))

    assert [p.id for p in page] == [newer.id, older.id]


@pytest.mark.django_db
def test_newest_and_oldest_break_ties_by_id(make_post):
    posts = [make_post(f"Same instant {i}") for i in range(4)]
    same = timezone.now()
    Post.objects.filter(id__in=[p.id for p in posts]).update(published_at=same)
    expected = sorted(p.id for p in posts)

    newest = get_post_page(PostFilter(), SortMode.NEWEST, PageRequest.build(1, 10))
    oldest = get_post_page(PostFilter(), SortMode.OLDEST, PageRequest.build(1, 10))

    assert [p.id for p in newest] == expected
    assert [p.id for p in oldest] == expected


@pytest.mark.django_db
def test_popular_orders_whole_set_before_paging(make_post, make_user):
    quiet = [make_post(f"Quiet {i}") for i in range(3)]
    star = make_post("Star")
    now = timezone.now()
    _set_published_at(star, now - timedelta(days=10))
    for i, post in enumerate(quiet):
        _set_published_at(post, now - timedelta(minutes=i))
    Like.objects.create(post=star, user=make_user())

    first_page = get_post_page(PostFilter(), SortMode.POPULAR, PageRequest.build(1, 1))

    assert [p.id for p in first_page] == [star.id]
