import pytest

from apps.domains.posts.models import Post
from apps.domains.posts.slugs import ensure_unique_slug, generate_slug


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Hello World", "hello-world"),
        ("Hello World!!!", "hello-world"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("snake_case  and--dashes", "snake-case-and-dashes"),
        ("---Fenced---", "fenced"),
        ("Café & Crème", "caf-crme"),
        ("!!!", ""),
    ],
)
def test_generate_slug(title, expected):
    assert generate_slug(title) == expected


def test_ensure_unique_slug_appends_counter():
    taken = {"hello-world", "hello-world-1"}

    slug = ensure_unique_slug("hello-world", exists=lambda s, exclude_post_id=None: s in taken)

    assert slug == "hello-world-2"


def test_ensure_unique_slug_empty_candidate_falls_back():
    assert ensure_unique_slug("", exists=lambda s, exclude_post_id=None: False) == "post"


@pytest.mark.django_db
def test_duplicate_titles_get_distinct_slugs(make_post):
    first = make_post("Hello World")
    second = make_post("Hello World!!!")
    third = make_post("Hello World")

    assert first.slug == "hello-world"
    assert second.slug == "hello-world-1"
    assert third.slug == "hello-world-2"
    assert Post.objects.filter(slug__startswith="hello-world").count() == 3


@pytest.mark.django_db
def test_post_keeps_own_slug_when_title_unchanged_after_normalisation(make_post, post_service, user):
    post = make_post("Hello World")

    updated = post_service.update_post(post.id, user, {"title": "Hello, World"})

    assert updated.slug == "hello-world"
    assert updated.title == "Hello, World"


@pytest.mark.parametrize("reserved", ["recent", "tags", "search", "mine", "images"])
def test_route_names_are_never_used_as_slugs(reserved):
    assert ensure_unique_slug(reserved, exists=lambda s, exclude_post_id=None: False) == f"{reserved}-1"
