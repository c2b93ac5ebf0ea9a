from .like import Like
from .comment import Comment, COMMENT_MAX_LENGTH

__all__ = [
    "Like",
    "Comment",
    "COMMENT_MAX_LENGTH",
]
