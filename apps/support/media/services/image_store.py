# ==============================================================================
# PATH: apps/support/media/services/image_store.py
#
# PURPOSE:
# - store post featured images, inline body images and avatars in an R2 (S3 compatible) bucket
# - cleanup only touches objects this store issued under the owner's folder
# - object key: upload/{folder}/{uuid}.{ext}
# - public URL: {R2_PUBLIC_BASE_URL}/upload/{folder}/{uuid}.{ext}
# ==============================================================================

from __future__ import annotations

import logging
import mimetypes
import os
import re
import uuid
from functools import lru_cache
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from rest_framework.exceptions import ValidationError

from apps.api.common.exceptions import UpstreamError
from libs.s3_client.client import build_s3_client, get_bucket

logger = logging.getLogger(__name__)

UPLOAD_ROOT = "upload"

_ASSET_REF = re.compile(r"/upload/(?:v\d+/)?(.+)\.[^./]+$")


def extract_asset_ref(url: Optional[str]) -> Optional[str]:
    """
    ".../upload/(v<version>/)?<asset_ref>.<ext>" -> asset_ref

    URLs that do not follow the convention yield None.
    """
    if not url:
        return None
    match = _ASSET_REF.search(url)
    return match.group(1) if match else None


def owned_asset_ref(url: Optional[str], public_base_url: str, folder: str) -> Optional[str]:
    """
    asset_ref of ``url`` when it was issued from ``public_base_url`` under
    ``folder``; None for foreign hosts, other folders and traversal segments.
    """
    root = f"{public_base_url.rstrip('/')}/{UPLOAD_ROOT}/"
    if not url or not url.startswith(root):
        return None
    asset_ref = extract_asset_ref(url)
    if not asset_ref or ".." in asset_ref.split("/"):
        return None
    if not asset_ref.startswith(f"{folder.strip('/')}/"):
        return None
    return asset_ref


def _guess_format(filename: Optional[str], content_type: Optional[str]) -> str:
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    if not ext and content_type:
        guessed = mimetypes.guess_extension(content_type) or ""
        ext = guessed.lstrip(".").lower()
    return ext


class ImageStore:
    def __init__(
        self,
        *,
        client,
        bucket: str,
        public_base_url: str,
        max_bytes: int,
        allowed_formats,
    ):
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes
        self.allowed_formats = tuple(allowed_formats)

    # ------------------------------------------------------------------
    # upload
    # ------------------------------------------------------------------

    def upload(self, fileobj, folder: str, *, max_bytes: Optional[int] = None) -> str:
        """Validate and store an uploaded image; returns its public URL."""
        limit = max_bytes or self.max_bytes
        size = getattr(fileobj, "size", None)
        if size is not None and size > limit:
            raise ValidationError({"image": [f"Image must be at most {limit // (1024 * 1024)} MB."]})

        content_type = getattr(fileobj, "content_type", None)
        fmt = _guess_format(getattr(fileobj, "name", None), content_type)
        if fmt not in self.allowed_formats:
            raise ValidationError({"image": ["Unsupported image format."]})

        if hasattr(fileobj, "seek"):
            fileobj.seek(0)
        body = fileobj.read()
        if len(body) > limit:
            raise ValidationError({"image": [f"Image must be at most {limit // (1024 * 1024)} MB."]})

        asset_ref = f"{folder.strip('/')}/{uuid.uuid4().hex}"
        key = f"{UPLOAD_ROOT}/{asset_ref}.{fmt}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type or mimetypes.types_map.get(f".{fmt}", "application/octet-stream"),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("image upload failed key=%s: %s", key, e)
            raise UpstreamError("Image upload failed.") from e

        return self.url_for(asset_ref, fmt)

    # ------------------------------------------------------------------
    # delete
    # ------------------------------------------------------------------

    def delete(self, asset_ref: str) -> bool:
        """Remove every stored rendition of ``asset_ref``. False when nothing matched."""
        prefix = f"{UPLOAD_ROOT}/{asset_ref}."
        try:
            resp = self.client.list_objects_v2(Bucket=self.bucket, Prefix=prefix)
            keys = [{"Key": obj["Key"]} for obj in resp.get("Contents", [])]
            if not keys:
                return False
            self.client.delete_objects(Bucket=self.bucket, Delete={"Objects": keys})
        except (BotoCoreError, ClientError) as e:
            raise UpstreamError("Image delete failed.") from e
        return True

    def delete_url(self, url: Optional[str], *, folder: str) -> bool:
        """Delete ``url`` only when this store issued it under ``folder``."""
        asset_ref = owned_asset_ref(url, self.public_base_url, folder)
        if not asset_ref:
            return False
        return self.delete(asset_ref)

    def url_for(self, asset_ref: str, fmt: str = "jpg") -> str:
        return f"{self.public_base_url}/{UPLOAD_ROOT}/{asset_ref}.{fmt}"


@lru_cache(maxsize=1)
def get_image_store() -> ImageStore:
    return ImageStore(
        client=build_s3_client(),
        bucket=get_bucket(),
        public_base_url=settings.R2_PUBLIC_BASE_URL,
        max_bytes=settings.IMAGE_MAX_UPLOAD_BYTES,
        allowed_formats=settings.IMAGE_ALLOWED_FORMATS,
    )


def discard_image(image_store: ImageStore, url: Optional[str], *, folder: str) -> None:
    """
    Best-effort removal of a stale image owned by ``folder``.

    URLs outside the owner's folder (another user's upload, an external
    host) are left alone. Failures are logged only.
    """
    if not url:
        return
    try:
        if not image_store.delete_url(url, folder=folder):
            logger.info("stale image not removed (not owned or missing) url=%s folder=%s", url, folder)
    except UpstreamError:
        logger.warning("stale image cleanup failed url=%s", url, exc_info=True)
