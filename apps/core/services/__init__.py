from .account_service import (
    register_user,
    get_public_profile,
    update_profile,
    update_avatar,
)
from .verification_service import (
    code_ttl_seconds,
    request_password_reset,
    resend_verification_code,
    reset_password,
    verify_email,
)

__all__ = [
    "register_user",
    "get_public_profile",
    "update_profile",
    "update_avatar",
    "code_ttl_seconds",
    "request_password_reset",
    "resend_verification_code",
    "reset_password",
    "verify_email",
]
