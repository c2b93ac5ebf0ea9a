from .post import Post
from .post_tag import PostTag

__all__ = [
    "Post",
    "PostTag",
]
