import uuid

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated

from apps.api.common.pagination import PageRequest, parse_csv
from apps.api.common.responses import success
from apps.domains.posts.api.serializers import (
    ImageUploadSerializer,
    PostCreateSerializer,
    PostSerializer,
    PostUpdateSerializer,
)
from apps.domains.posts.filters import PostFilter, SortMode
from apps.domains.posts.selectors import get_all_tags
from apps.domains.posts.services import (
    PostService,
    author_posts,
    get_post_for_reader,
    list_posts,
    recent_posts,
    search_posts,
)

LIST_PARAMS = [
    openapi.Parameter("page", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
    openapi.Parameter("limit", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
    openapi.Parameter("tags", openapi.IN_QUERY, type=openapi.TYPE_STRING, description="comma separated"),
    openapi.Parameter("search", openapi.IN_QUERY, type=openapi.TYPE_STRING),
    openapi.Parameter("sort_by", openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=list(SortMode.values)),
]


def _viewer(request):
    user = request.user
    return user if user.is_authenticated else None


def _parse_post_id(raw):
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError):
        raise NotFound("Post not found")


def _page_payload(page, context) -> dict:
    return {
        "items": PostSerializer(page.items, many=True, context=context).data,
        "pagination": page.pagination,
    }


class PostViewSet(viewsets.GenericViewSet):
    """
    /posts/            GET list, POST create
    /posts/<slug>/     GET (published only)
    /posts/<id>/       PATCH, DELETE (author only)
    """

    serializer_class = PostSerializer
    lookup_field = "lookup"
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    public_actions = ("list", "retrieve", "recent", "tags", "search")

    def get_permissions(self):
        if self.action in self.public_actions:
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_service(self) -> PostService:
        return PostService()

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    @swagger_auto_schema(manual_parameters=LIST_PARAMS)
    def list(self, request):
        params = request.query_params
        post_filter = PostFilter.build(
            text=params.get("search"),
            tags=parse_csv(params.get("tags")),
        )
        page = list_posts(
            post_filter,
            SortMode.parse(params.get("sort_by")),
            PageRequest.from_query(params),
            viewer=_viewer(request),
        )
        return success("Posts retrieved successfully", **_page_payload(page, self.get_serializer_context()))

    def retrieve(self, request, lookup=None):
        post = get_post_for_reader(lookup, viewer=_viewer(request))
        return success("Post retrieved successfully", post=self.get_serializer(post).data)

    @action(detail=False, methods=["get"])
    def recent(self, request):
        page = recent_posts(PageRequest.from_query(request.query_params), viewer=_viewer(request))
        return success("Recent posts retrieved successfully", **_page_payload(page, self.get_serializer_context()))

    @action(detail=False, methods=["get"])
    def tags(self, request):
        return success("Tags retrieved successfully", tags=get_all_tags())

    @swagger_auto_schema(manual_parameters=[
        openapi.Parameter("q", openapi.IN_QUERY, type=openapi.TYPE_STRING, required=True),
        *LIST_PARAMS[:3],
        LIST_PARAMS[4],
    ])
    @action(detail=False, methods=["get"])
    def search(self, request):
        params = request.query_params
        page, query = search_posts(
            params.get("q"),
            PageRequest.from_query(params),
            tags=parse_csv(params.get("tags")),
            sort=SortMode.parse(params.get("sort_by")),
            viewer=_viewer(request),
        )
        total = page.pagination["total"]
        return success(
            f'Found {total} post(s) matching "{query}"',
            **_page_payload(page, self.get_serializer_context()),
        )

    @action(detail=False, methods=["get"])
    def mine(self, request):
        params = request.query_params
        page = author_posts(
            request.user,
            PageRequest.from_query(params),
            sort=SortMode.parse(params.get("sort_by")),
        )
        return success("Your posts retrieved successfully", **_page_payload(page, self.get_serializer_context()))

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------

    @swagger_auto_schema(request_body=PostCreateSerializer)
    def create(self, request):
        serializer = PostCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        post = self.get_service().create_post(
            request.user,
            serializer.validated_data,
            image_file=request.FILES.get("featured_image_file"),
        )
        message = "Post published successfully" if post.published else "Post saved as draft"
        return success(message, status=status.HTTP_201_CREATED, post=self.get_serializer(post).data)

    @swagger_auto_schema(request_body=PostUpdateSerializer)
    def partial_update(self, request, lookup=None):
        serializer = PostUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        post = self.get_service().update_post(
            _parse_post_id(lookup),
            request.user,
            serializer.validated_data,
            image_file=request.FILES.get("featured_image_file"),
        )
        return success("Post updated successfully", post=self.get_serializer(post).data)

    def destroy(self, request, lookup=None):
        self.get_service().delete_post(_parse_post_id(lookup), request.user)
        return success("Post deleted successfully")

    @swagger_auto_schema(request_body=ImageUploadSerializer)
    @action(detail=False, methods=["post"], parser_classes=[MultiPartParser, FormParser])
    def images(self, request):
        serializer = ImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        url = self.get_service().upload_image(request.user, serializer.validated_data["image"])
        return success("Image uploaded successfully", status=status.HTTP_201_CREATED, url=url)
