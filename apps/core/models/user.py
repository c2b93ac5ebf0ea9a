import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models

from apps.api.common.models import TimestampModel


# --------------------------------------------------
# Custom User (AUTH_USER_MODEL)
# --------------------------------------------------

class User(AbstractUser):
    """
    Custom User model
    - AUTH_USER_MODEL = core.User
    - logs in with email; username is kept for the admin and mirrors the email
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=100)
    avatar = models.URLField(max_length=500, blank=True, null=True)
    bio = models.CharField(max_length=500, blank=True, null=True)
    is_verified = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username", "full_name"]

    class Meta:
        app_label = "core"
        db_table = "accounts_user"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email


# --------------------------------------------------
# Preference (topical affinity for explore)
# --------------------------------------------------

class UserPreference(TimestampModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="preference",
    )
    tags = models.JSONField(default=list, blank=True)

    class Meta:
        app_label = "core"
        db_table = "accounts_user_preference"

    def __str__(self):
        return f"{self.user} - {', '.join(self.tags)}"
