"""
Account writes: registration, profile edits, avatar replacement.

User + preference rows always change together inside one transaction.
"""
import logging
from functools import partial
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from rest_framework.exceptions import NotFound

from apps.api.common.exceptions import Conflict, UpstreamError
from apps.core.models import UserPreference
from apps.core.services.verification_service import send_verification_code
from apps.support.media.services.image_store import discard_image, get_image_store
from apps.support.messaging.tasks import send_welcome_email_task

logger = logging.getLogger(__name__)

User = get_user_model()

EMAIL_TAKEN_MESSAGE = "Email is already in use"


def _enqueue_welcome_email(user_id) -> None:
    # welcome mail never fails the request
    try:
        send_welcome_email_task.delay(str(user_id))
    except Exception:
        logger.warning("welcome email not sent user=%s", user_id, exc_info=True)


def _send_verification_code(user) -> None:
    # signup succeeds without it; resend-code recovers
    try:
        send_verification_code(user)
    except UpstreamError:
        logger.warning("verification code not sent user=%s", user.pk, exc_info=True)


def register_user(*, email: str, password: str, full_name: str, tags=None) -> User:
    if User.objects.filter(email__iexact=email).exists():
        raise Conflict(EMAIL_TAKEN_MESSAGE)

    try:
        with transaction.atomic():
            user = User(email=email, username=email, full_name=full_name)
            user.set_password(password)
            user.save()
            UserPreference.objects.create(user=user, tags=list(tags or []))
            transaction.on_commit(partial(_send_verification_code, user))
            transaction.on_commit(partial(_enqueue_welcome_email, user.id))
    except IntegrityError as e:
        raise Conflict(EMAIL_TAKEN_MESSAGE) from e

    logger.info("user registered id=%s", user.id)
    return user


def get_public_profile(user_id) -> User:
    user = (
        User.objects.filter(pk=user_id, is_active=True)
        .annotate(posts_count=Count("posts", filter=Q(posts__published=True)))
        .first()
    )
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(user, data: dict) -> User:
    """Partial update of the profile and, when ``tags`` is given, the preference row."""
    fields = []

    if "email" in data and data["email"] != user.email:
        if User.objects.filter(email__iexact=data["email"]).exclude(pk=user.pk).exists():
            raise Conflict(EMAIL_TAKEN_MESSAGE)
        user.email = data["email"]
        user.username = data["email"]
        fields += ["email", "username"]

    for name in ("full_name", "bio", "avatar"):
        if name in data:
            value = data[name]
            if name != "full_name":
                value = value or None
            setattr(user, name, value)
            fields.append(name)

    try:
        with transaction.atomic():
            if fields:
                user.save(update_fields=fields + ["updated_at"])
            if "tags" in data:
                UserPreference.objects.update_or_create(
                    user=user,
                    defaults={"tags": list(data["tags"])},
                )
    except IntegrityError as e:
        raise Conflict(EMAIL_TAKEN_MESSAGE) from e

    return User.objects.select_related("preference").get(pk=user.pk)


def avatar_folder(user_id) -> str:
    return f"avatars/{user_id}"


def update_avatar(user, fileobj, *, image_store=None) -> User:
    """Upload first, then swap the URL; the previous avatar goes after commit."""
    image_store = image_store or get_image_store()
    folder = avatar_folder(user.pk)
    new_url = image_store.upload(
        fileobj,
        folder,
        max_bytes=settings.AVATAR_MAX_UPLOAD_BYTES,
    )

    old_url: Optional[str] = user.avatar
    try:
        with transaction.atomic():
            user.avatar = new_url
            user.save(update_fields=["avatar", "updated_at"])
            if old_url:
                transaction.on_commit(partial(discard_image, image_store, old_url, folder=folder))
    except Exception:
        discard_image(image_store, new_url, folder=folder)
        raise

    logger.info("avatar updated user=%s", user.pk)
    return user
