import boto3
import pytest
from botocore.stub import ANY, Stubber
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.exceptions import ValidationError

from apps.api.common.exceptions import UpstreamError
from apps.support.media.services.image_store import ImageStore, discard_image, extract_asset_ref, owned_asset_ref


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="auto",
        endpoint_url="https://r2.example.test",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.fixture
def store(s3_client):
    return ImageStore(
        client=s3_client,
        bucket="test-bucket",
        public_base_url="https://cdn.example.test/",
        max_bytes=1024,
        allowed_formats=("jpg", "jpeg", "png"),
    )


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://cdn.example.test/upload/posts/u1/abc.jpg", "posts/u1/abc"),
        ("https://res.example.com/image/upload/v1699/avatars/u2/face.png", "avatars/u2/face"),
        ("https://cdn.example.test/other/abc.jpg", None),
        (None, None),
    ],
)
def test_extract_asset_ref(url, expected):
    assert extract_asset_ref(url) == expected


def test_upload_puts_object_and_returns_public_url(store, s3_client):
    upload = SimpleUploadedFile("Photo.JPG", b"jpeg-bytes", content_type="image/jpeg")

    with Stubber(s3_client) as stub:
        stub.add_response(
            "put_object",
            {},
            {"Bucket": "test-bucket", "Key": ANY, "Body": b"jpeg-bytes", "ContentType": "image/jpeg"},
        )
        url = store.upload(upload, "posts/u1")
        stub.assert_no_pending_responses()

    assert url.startswith("https://cdn.example.test/upload/posts/u1/")
    assert url.endswith(".jpg")
    assert extract_asset_ref(url).startswith("posts/u1/")


def test_upload_rejects_large_or_unknown_files(store):
    too_big = SimpleUploadedFile("big.png", b"x" * 2048, content_type="image/png")
    wrong = SimpleUploadedFile("doc.pdf", b"%PDF", content_type="application/pdf")

    with pytest.raises(ValidationError):
        store.upload(too_big, "posts/u1")
    with pytest.raises(ValidationError):
        store.upload(wrong, "posts/u1")


def test_upload_failure_is_upstream_error(store, s3_client):
    upload = SimpleUploadedFile("a.png", b"png", content_type="image/png")

    with Stubber(s3_client) as stub:
        stub.add_client_error("put_object", service_error_code="InternalError", http_status_code=500)
        with pytest.raises(UpstreamError):
            store.upload(upload, "posts/u1")


def test_delete_removes_matching_objects(store, s3_client):
    with Stubber(s3_client) as stub:
        stub.add_response(
            "list_objects_v2",
            {"Contents": [{"Key": "upload/posts/u1/abc.jpg"}]},
            {"Bucket": "test-bucket", "Prefix": "upload/posts/u1/abc."},
        )
        stub.add_response(
            "delete_objects",
            {"Deleted": [{"Key": "upload/posts/u1/abc.jpg"}]},
            {"Bucket": "test-bucket", "Delete": {"Objects": [{"Key": "upload/posts/u1/abc.jpg"}]}},
        )
        assert store.delete("posts/u1/abc") is True
        stub.assert_no_pending_responses()


def test_delete_without_matches_returns_false(store, s3_client):
    with Stubber(s3_client) as stub:
        stub.add_response("list_objects_v2", {}, {"Bucket": "test-bucket", "Prefix": "upload/gone."})
        assert store.delete("gone") is False


def test_discard_image_swallows_upstream_failures(store, s3_client):
    with Stubber(s3_client) as stub:
        stub.add_client_error("list_objects_v2", service_error_code="AccessDenied", http_status_code=403)
        discard_image(store, "https://cdn.example.test/upload/posts/u1/abc.jpg", folder="posts/u1")


def test_url_for(store):
    assert store.url_for("posts/u1/abc", "png") == "https://cdn.example.test/upload/posts/u1/abc.png"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://cdn.example.test/upload/posts/u1/abc.jpg", "posts/u1/abc"),
        ("https://cdn.example.test/upload/posts/u2/abc.jpg", None),
        ("https://cdn.example.test/upload/posts/u1/../u2/abc.jpg", None),
        ("https://evil.example.com/upload/posts/u1/abc.jpg", None),
        ("https://cdn.example.test/upload/posts/u10/abc.jpg", None),
        (None, None),
    ],
)
def test_owned_asset_ref(url, expected):
    assert owned_asset_ref(url, "https://cdn.example.test/", "posts/u1") == expected


def test_delete_url_outside_folder_makes_no_calls(store, s3_client):
    with Stubber(s3_client) as stub:
        assert store.delete_url("https://cdn.example.test/upload/posts/u2/abc.jpg", folder="posts/u1") is False
        stub.assert_no_pending_responses()
