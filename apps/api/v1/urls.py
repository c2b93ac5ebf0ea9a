# apps/api/v1/urls.py
from django.urls import include, path

urlpatterns = [
    # =========================
    # Accounts
    # =========================
    path("", include("apps.core.urls")),

    # =========================
    # Domain APIs
    # =========================
    # fixed /posts/<id>/like|comments paths before the posts router
    path("", include("apps.domains.interactions.api.urls")),
    path("", include("apps.domains.posts.api.urls")),
    path("", include("apps.domains.explore.api.urls")),
    path("", include("apps.domains.subscriptions.urls")),
]
