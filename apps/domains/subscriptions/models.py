import uuid

from django.db import models


class EmailSubscription(models.Model):
    """Newsletter subscriber. Unsubscribing flips is_active; rows are never removed."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "email_subscriptions"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.email} ({'active' if self.is_active else 'inactive'})"
