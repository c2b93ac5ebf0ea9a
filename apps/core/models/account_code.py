from django.db import models
from django.utils import timezone


# --------------------------------------------------
# One-time codes (email verification / password reset)
# --------------------------------------------------

class AccountCode(models.Model):
    class Purpose(models.TextChoices):
        VERIFY_EMAIL = "verify_email", "Verify email"
        RESET_PASSWORD = "reset_password", "Reset password"

    email = models.EmailField(db_index=True)
    purpose = models.CharField(max_length=20, choices=Purpose.choices)
    code = models.CharField(max_length=6)
    expires_at = models.DateTimeField()
    used_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "core"
        db_table = "accounts_code"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["email", "purpose", "-created_at"], name="accounts_code_lookup_idx"),
        ]

    def __str__(self):
        return f"{self.email} ({self.purpose})"

    @property
    def is_usable(self) -> bool:
        return self.used_at is None and self.expires_at >= timezone.now()
