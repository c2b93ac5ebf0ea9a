"""
Post lifecycle: create, partial update, publish transitions, delete.

Draft (published=False, published_at=None) and Published (published=True,
published_at set) are the only states. Image files are uploaded before the
database transaction opens; stale images are removed only after it commits.
"""
import logging
from functools import partial
from typing import Optional

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from apps.api.common.exceptions import Conflict
from apps.domains.posts.filters import normalize_tags
from apps.domains.posts.models import Post, PostTag
from apps.domains.posts.sanitizers import sanitize_content
from apps.domains.posts.selectors import get_post_by_id
from apps.domains.posts.slugs import ensure_unique_slug, generate_slug
from apps.support.media.services.image_store import discard_image, get_image_store

logger = logging.getLogger(__name__)

DUPLICATE_TITLE_MESSAGE = "A post with similar title already exists"

_UNSET = object()


def image_folder(author_id) -> str:
    return f"posts/{author_id}"


class PostService:
    def __init__(self, image_store=None):
        self.image_store = image_store or get_image_store()

    # ------------------------------------------------------------------
    # images
    # ------------------------------------------------------------------

    def upload_image(self, user, fileobj) -> str:
        return self.image_store.upload(fileobj, image_folder(user.pk))

    def _discard(self, url: Optional[str], author_id) -> None:
        discard_image(self.image_store, url, folder=image_folder(author_id))

    def _discard_after_commit(self, url: Optional[str], author_id) -> None:
        # only images stored under the author's own folder are removed
        if url:
            transaction.on_commit(partial(self._discard, url, author_id))

    # ------------------------------------------------------------------
    # tags
    # ------------------------------------------------------------------

    def set_post_tags(self, post: Post, tags) -> None:
        tags = normalize_tags(tags)
        PostTag.objects.filter(post=post).delete()
        PostTag.objects.bulk_create(
            [PostTag(post=post, name=name, position=i) for i, name in enumerate(tags)]
        )

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    def create_post(self, author, data: dict, *, image_file=None) -> Post:
        featured_image = data.get("featured_image") or None
        uploaded = None
        if image_file is not None:
            uploaded = featured_image = self.upload_image(author, image_file)

        published = bool(data.get("published", False))
        try:
            with transaction.atomic():
                post = Post.objects.create(
                    author=author,
                    title=data["title"].strip(),
                    content=sanitize_content(data["content"]),
                    slug=ensure_unique_slug(generate_slug(data["title"])),
                    featured_image=featured_image,
                    allow_comments=data.get("allow_comments", True),
                    published=published,
                    published_at=timezone.now() if published else None,
                )
                self.set_post_tags(post, data.get("tags") or [])
        except IntegrityError as e:
            self._discard(uploaded, author.pk)
            logger.warning("post create rejected by unique constraint author=%s: %s", author.pk, e)
            raise Conflict(DUPLICATE_TITLE_MESSAGE) from e
        except Exception:
            self._discard(uploaded, author.pk)
            raise

        logger.info("post created id=%s slug=%s published=%s", post.id, post.slug, published)
        return get_post_by_id(post.id, viewer=author)

    # ------------------------------------------------------------------
    # update
    # ------------------------------------------------------------------

    def _get_owned_post(self, post_id, user, *, action: str) -> Post:
        # existence before ownership
        post = Post.objects.filter(id=post_id).first()
        if post is None:
            raise NotFound("Post not found")
        if post.author_id != user.pk:
            raise PermissionDenied(f"You can only {action} your own posts")
        return post

    def update_post(self, post_id, user, data: dict, *, image_file=None) -> Post:
        """
        Partial update; only keys present in ``data`` change.

        ``featured_image`` present with a falsy value removes the image.
        An uploaded ``image_file`` wins over a ``featured_image`` URL.
        """
        post = self._get_owned_post(post_id, user, action="edit")

        new_image = data.get("featured_image", _UNSET)
        uploaded = None
        if image_file is not None:
            uploaded = new_image = self.upload_image(user, image_file)

        fields = []
        old_image = None

        if "title" in data and data["title"].strip() != post.title:
            post.title = data["title"].strip()
            post.slug = ensure_unique_slug(generate_slug(post.title), exclude_post_id=post.id)
            fields += ["title", "slug"]

        if "content" in data:
            post.content = sanitize_content(data["content"])
            fields.append("content")

        if "allow_comments" in data:
            post.allow_comments = data["allow_comments"]
            fields.append("allow_comments")

        if new_image is not _UNSET:
            new_image = new_image or None
            if new_image != post.featured_image:
                old_image = post.featured_image
                post.featured_image = new_image
                fields.append("featured_image")

        if "published" in data:
            published = bool(data["published"])
            if published and not post.published:
                post.published_at = timezone.now()
            elif not published and post.published:
                post.published_at = None
            post.published = published
            fields += ["published", "published_at"]

        try:
            with transaction.atomic():
                if fields:
                    post.save(update_fields=fields + ["updated_at"])
                if "tags" in data:
                    self.set_post_tags(post, data["tags"] or [])
                self._discard_after_commit(old_image, post.author_id)
        except IntegrityError as e:
            self._discard(uploaded, user.pk)
            raise Conflict(DUPLICATE_TITLE_MESSAGE) from e
        except Exception:
            self._discard(uploaded, user.pk)
            raise

        logger.info("post updated id=%s fields=%s", post.id, ",".join(fields) or "-")
        return get_post_by_id(post.id, viewer=user)

    # ------------------------------------------------------------------
    # delete
    # ------------------------------------------------------------------

    def delete_post(self, post_id, user) -> None:
        post = self._get_owned_post(post_id, user, action="delete")
        featured_image = post.featured_image
        with transaction.atomic():
            # comments / likes / tags cascade
            post.delete()
            self._discard_after_commit(featured_image, post.author_id)
        logger.info("post deleted id=%s", post_id)
