from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from apps.api.common.pagination import PageRequest, parse_csv
from apps.api.common.responses import success
from apps.domains.explore.api.serializers import PostSummarySerializer
from apps.domains.explore.services import explore


class ExploreView(APIView):
    """GET /explore/?page=&limit=&tags=a,b"""
    permission_classes = [AllowAny]

    @swagger_auto_schema(manual_parameters=[
        openapi.Parameter("page", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        openapi.Parameter("limit", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        openapi.Parameter("tags", openapi.IN_QUERY, type=openapi.TYPE_STRING),
    ])
    def get(self, request):
        params = request.query_params
        viewer = request.user if request.user.is_authenticated else None
        result = explore(
            PageRequest.from_query(params),
            tags=parse_csv(params.get("tags")),
            viewer=viewer,
        )
        return success(
            "Content retrieved successfully",
            items=PostSummarySerializer(result.page.items, many=True).data,
            pagination=result.page.pagination,
            available_tags=result.available_tags,
        )
