import pytest

from apps.api.common.pagination import PageRequest
from apps.core.models import UserPreference
from apps.domains.explore.services import explore, preference_tags_for
from apps.domains.interactions.models import Like
from apps.domains.posts.selectors import get_popular_tags

pytestmark = pytest.mark.django_db


@pytest.fixture
def catalogue(make_post, make_user):
    faith = make_post("Faith post", tags=["faith"])
    hope = make_post("Hope post", tags=["hope"])
    love = make_post("Love post", tags=["love", "faith"])
    make_post("Draft faith", published=False, tags=["faith"])
    for _ in range(3):
        Like.objects.create(post=hope, user=make_user())
    Like.objects.create(post=love, user=make_user())
    return {"faith": faith, "hope": hope, "love": love}


def test_explicit_tags_win_over_preferences(catalogue, make_user):
    viewer = make_user(tags=["hope"])

    result = explore(PageRequest.build(1, 10), tags=["faith"], viewer=viewer)

    assert result.applied_tags == ("faith",)
    assert [p.id for p in result.page.items] == [catalogue["love"].id, catalogue["faith"].id]


def test_preferences_used_when_no_tags_given(catalogue, make_user):
    viewer = make_user(tags=["hope"])

    result = explore(PageRequest.build(1, 10), viewer=viewer)

    assert result.applied_tags == ("hope",)
    assert [p.id for p in result.page.items] == [catalogue["hope"].id]


def test_global_ranking_for_anonymous(catalogue):
    result = explore(PageRequest.build(1, 10))

    assert result.applied_tags == ()
    assert [p.id for p in result.page.items][:2] == [catalogue["hope"].id, catalogue["love"].id]
    assert result.page.pagination["total"] == 3


def test_available_tags_by_frequency(catalogue):
    result = explore(PageRequest.build(1, 10))

    assert result.available_tags == ["faith", "hope", "love"]
    assert get_popular_tags(1) == ["faith"]


def test_preference_tags_for_user_without_preference_row(make_user):
    viewer = make_user(tags=["x"])
    UserPreference.objects.filter(user=viewer).delete()

    assert preference_tags_for(viewer) == []
    assert preference_tags_for(None) == []
