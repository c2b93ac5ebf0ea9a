from django.urls import path

from .views import CommentDetailView, PostCommentsView, PostLikeView

urlpatterns = [
    path("posts/comments/<uuid:comment_id>/", CommentDetailView.as_view(), name="comment-detail"),
    path("posts/<uuid:post_id>/like/", PostLikeView.as_view(), name="post-like"),
    path("posts/<uuid:post_id>/comments/", PostCommentsView.as_view(), name="post-comments"),
]
