from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from apps.api.common.responses import success

from .serializers import EmailSubscriptionSerializer, SubscribeSerializer
from .services import subscribe


class SubscriptionView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(request_body=SubscribeSerializer)
    def post(self, request):
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription, reactivated = subscribe(serializer.validated_data["email"])
        if reactivated:
            message = "Successfully reactivated your newsletter subscription"
            code = status.HTTP_200_OK
        else:
            message = "Successfully subscribed to our newsletter!"
            code = status.HTTP_201_CREATED
        return success(message, status=code, subscription=EmailSubscriptionSerializer(subscription).data)
