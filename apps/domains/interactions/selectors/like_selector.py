from apps.domains.interactions.models import Like


def count_likes(post_id) -> int:
    return Like.objects.filter(post_id=post_id).count()


def has_liked(post_id, user) -> bool:
    return Like.objects.filter(post_id=post_id, user_id=user.pk).exists()
