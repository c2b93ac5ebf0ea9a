import itertools

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from apps.core.models import User, UserPreference
from apps.domains.posts.services import PostService


class FakeImageStore:
    """In-memory stand-in for the R2 image store."""

    base_url = public_base_url = "https://cdn.example.test"

    def __init__(self):
        self._counter = itertools.count(1)
        self.uploaded = []
        self.deleted = []
        self.fail_deletes = False

    def upload(self, fileobj, folder, *, max_bytes=None):
        url = f"{self.base_url}/upload/{folder}/img{next(self._counter)}.jpg"
        self.uploaded.append(url)
        return url

    def delete(self, asset_ref):
        from apps.api.common.exceptions import UpstreamError

        if self.fail_deletes:
            raise UpstreamError("Image delete failed.")
        self.deleted.append(asset_ref)
        return True

    def delete_url(self, url, *, folder):
        from apps.support.media.services.image_store import owned_asset_ref

        asset_ref = owned_asset_ref(url, self.public_base_url, folder)
        if not asset_ref:
            return False
        return self.delete(asset_ref)

    def url_for(self, asset_ref, fmt="jpg"):
        return f"{self.base_url}/upload/{asset_ref}.{fmt}"


@pytest.fixture
def image_store(monkeypatch):
    store = FakeImageStore()
    monkeypatch.setattr("apps.domains.posts.services.post_service.get_image_store", lambda: store)
    monkeypatch.setattr("apps.core.services.account_service.get_image_store", lambda: store)
    return store


@pytest.fixture
def post_service(image_store):
    return PostService(image_store=image_store)


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make_user(email=None, full_name="Test Writer", password="s3cure-Passw0rd!", tags=None):
        n = next(counter)
        email = email or f"writer{n}@example.com"
        user = User.objects.create_user(
            email=email,
            username=email,
            full_name=full_name,
            password=password,
        )
        UserPreference.objects.create(user=user, tags=list(tags or []))
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(email="author@example.com", full_name="Ada Author")


@pytest.fixture
def other_user(make_user):
    return make_user(email="reader@example.com", full_name="Rhea Reader")


@pytest.fixture
def make_post(post_service, user):
    def _make_post(title="A Post Title", *, author=None, published=True, tags=(), content="<p>Body</p>", **extra):
        data = {
            "title": title,
            "content": content,
            "published": published,
            "tags": list(tags),
            **extra,
        }
        return post_service.create_post(author or user, data)

    return _make_post


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def image_file():
    return SimpleUploadedFile("photo.jpg", b"\xff\xd8\xff\xe0fake-jpeg", content_type="image/jpeg")
