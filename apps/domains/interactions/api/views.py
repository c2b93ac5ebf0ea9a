from django.conf import settings
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from apps.api.common.pagination import PageRequest
from apps.api.common.responses import success
from apps.domains.interactions.api.serializers import CommentCreateSerializer, CommentSerializer
from apps.domains.interactions.services import (
    create_comment,
    delete_comment,
    list_comments,
    toggle_like,
)


class PostLikeView(APIView):
    """POST /posts/<post_id>/like/ toggles the caller's like."""
    permission_classes = [IsAuthenticated]

    def post(self, request, post_id):
        state = toggle_like(post_id, request.user)
        message = "Post liked successfully" if state.is_liked else "Post unliked successfully"
        return success(message, is_liked=state.is_liked, likes_count=state.likes_count)


class PostCommentsView(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, post_id):
        page_request = PageRequest.from_query(
            request.query_params,
            default_limit=settings.COMMENTS_DEFAULT_PAGE_SIZE,
        )
        page = list_comments(post_id, page_request)
        return success(
            "Comments retrieved successfully",
            items=CommentSerializer(page.items, many=True).data,
            pagination=page.pagination,
        )

    @swagger_auto_schema(request_body=CommentCreateSerializer)
    def post(self, request, post_id):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = create_comment(post_id, request.user, serializer.validated_data["content"])
        return success(
            "Comment created successfully",
            status=status.HTTP_201_CREATED,
            comment=CommentSerializer(comment).data,
        )


class CommentDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, comment_id):
        delete_comment(comment_id, request.user)
        return success("Comment deleted successfully")
