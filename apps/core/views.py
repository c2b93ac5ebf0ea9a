# apps/core/views.py

from django.contrib.auth import get_user_model
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from apps.api.common.pagination import PageRequest
from apps.api.common.responses import success
from apps.core.models import AccountCode
from apps.core.serializers import (
    AuthorSerializer,
    AvatarUploadSerializer,
    EmailOnlySerializer,
    ProfileUpdateSerializer,
    PublicProfileSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    UserSerializer,
    VerifyEmailSerializer,
)
from apps.core.services import (
    code_ttl_seconds,
    get_public_profile,
    register_user,
    request_password_reset,
    resend_verification_code,
    reset_password,
    update_avatar,
    update_profile,
    verify_email,
)
from apps.domains.posts.api.serializers import PostSerializer
from apps.domains.posts.services import user_posts

User = get_user_model()


def _tokens_for(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


# --------------------------------------------------
# Auth: /auth/register/
# --------------------------------------------------

class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(request_body=RegisterSerializer)
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = register_user(**serializer.validated_data)
        return success(
            "Account created successfully",
            status=status.HTTP_201_CREATED,
            user=UserSerializer(user).data,
            tokens=_tokens_for(user),
        )


# --------------------------------------------------
# Auth: verification / password reset
# --------------------------------------------------

class VerifyEmailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(request_body=VerifyEmailSerializer)
    def post(self, request):
        serializer = VerifyEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = verify_email(**serializer.validated_data)
        return success(
            "Email verified successfully",
            user=UserSerializer(user).data,
            tokens=_tokens_for(user),
        )


class ResendCodeView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(request_body=EmailOnlySerializer)
    def post(self, request):
        serializer = EmailOnlySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        resend_verification_code(serializer.validated_data["email"])
        return success(
            "Verification code sent to your email",
            expires_in=code_ttl_seconds(AccountCode.Purpose.VERIFY_EMAIL),
        )


class ForgotPasswordView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(request_body=EmailOnlySerializer)
    def post(self, request):
        serializer = EmailOnlySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request_password_reset(serializer.validated_data["email"])
        # same answer whether or not the account exists
        return success(
            "If an account exists with this email, a password reset code has been sent",
            expires_in=code_ttl_seconds(AccountCode.Purpose.RESET_PASSWORD),
        )


class ResetPasswordView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(request_body=ResetPasswordSerializer)
    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reset_password(**serializer.validated_data)
        return success("Password reset successfully")


# --------------------------------------------------
# Me / Profile
# --------------------------------------------------

class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success("User retrieved successfully", user=UserSerializer(request.user).data)


class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(request_body=ProfileUpdateSerializer)
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = update_profile(request.user, serializer.validated_data)
        return success("Profile updated successfully", user=UserSerializer(user).data)


class AvatarView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @swagger_auto_schema(request_body=AvatarUploadSerializer)
    def patch(self, request):
        serializer = AvatarUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = update_avatar(request.user, serializer.validated_data["avatar"])
        return success("Avatar updated successfully", user=UserSerializer(user).data)


# --------------------------------------------------
# Public user pages
# --------------------------------------------------

class UserProfileView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, user_id):
        user = get_public_profile(user_id)
        return success("User profile retrieved successfully", user=PublicProfileSerializer(user).data)


class UserPostsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, user_id):
        viewer = request.user if request.user.is_authenticated else None
        page = user_posts(user_id, PageRequest.from_query(request.query_params), viewer=viewer)
        author = User.objects.get(pk=user_id)
        return success(
            "User posts retrieved successfully",
            author=AuthorSerializer(author).data,
            items=PostSerializer(page.items, many=True).data,
            pagination=page.pagination,
        )
