from .interaction_service import (
    LikeState,
    CommentPage,
    toggle_like,
    list_comments,
    create_comment,
    delete_comment,
)

__all__ = [
    "LikeState",
    "CommentPage",
    "toggle_like",
    "list_comments",
    "create_comment",
    "delete_comment",
]
