# apps/core/urls.py

from django.urls import path

from apps.core.views import (
    AvatarView,
    ForgotPasswordView,
    MeView,
    ProfileView,
    RegisterView,
    ResendCodeView,
    ResetPasswordView,
    UserPostsView,
    UserProfileView,
    VerifyEmailView,
)

urlpatterns = [
    path("auth/register/", RegisterView.as_view(), name="auth-register"),
    path("auth/verify/", VerifyEmailView.as_view(), name="auth-verify"),
    path("auth/resend-code/", ResendCodeView.as_view(), name="auth-resend-code"),
    path("auth/forgot-password/", ForgotPasswordView.as_view(), name="auth-forgot-password"),
    path("auth/reset-password/", ResetPasswordView.as_view(), name="auth-reset-password"),
    path("users/me/", MeView.as_view(), name="user-me"),
    path("users/profile/", ProfileView.as_view(), name="user-profile"),
    path("users/profile/avatar/", AvatarView.as_view(), name="user-avatar"),
    path("users/<uuid:user_id>/", UserProfileView.as_view(), name="user-detail"),
    path("users/<uuid:user_id>/posts/", UserPostsView.as_view(), name="user-posts"),
]
