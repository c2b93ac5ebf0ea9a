"""
One-time codes: email verification and password reset.

A code is issued and mailed in the same transaction, so a failed delivery
leaves no usable code behind. Consuming a code and applying its effect
(marking the user verified, setting the new password) also share one
transaction.
"""
import logging
import secrets
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from apps.core.models import AccountCode
from apps.support.messaging.email import (
    TEMPLATE_PASSWORD_RESET,
    TEMPLATE_VERIFY_EMAIL,
    send_critical_email,
)

logger = logging.getLogger(__name__)

User = get_user_model()

Purpose = AccountCode.Purpose

CODE_TTL = {
    Purpose.VERIFY_EMAIL: timedelta(minutes=10),
    Purpose.RESET_PASSWORD: timedelta(minutes=15),
}

TEMPLATE_FOR = {
    Purpose.VERIFY_EMAIL: TEMPLATE_VERIFY_EMAIL,
    Purpose.RESET_PASSWORD: TEMPLATE_PASSWORD_RESET,
}

INVALID_CODE_MESSAGE = {
    Purpose.VERIFY_EMAIL: "Invalid or expired verification code",
    Purpose.RESET_PASSWORD: "Invalid or expired reset code",
}

ALREADY_VERIFIED_MESSAGE = "Email already verified"
USER_NOT_FOUND_MESSAGE = "User not found"


def code_ttl_seconds(purpose) -> int:
    return int(CODE_TTL[purpose].total_seconds())


def _generate_code() -> str:
    return str(100000 + secrets.randbelow(900000))


def _find_user(email: str):
    return User.objects.filter(email__iexact=email).first()


def issue_code(email: str, purpose) -> AccountCode:
    """Create a code and mail it. Raises UpstreamError when delivery fails."""
    email = email.lower()
    ttl = CODE_TTL[purpose]
    with transaction.atomic():
        account_code = AccountCode.objects.create(
            email=email,
            purpose=purpose,
            code=_generate_code(),
            expires_at=timezone.now() + ttl,
        )
        send_critical_email(
            TEMPLATE_FOR[purpose],
            email,
            {"code": account_code.code, "expires_minutes": int(ttl.total_seconds() // 60)},
        )
    logger.info("account code issued email=%s purpose=%s", email, purpose)
    return account_code


def _consume_code(email: str, purpose, code: str) -> AccountCode:
    # caller holds the transaction
    account_code = (
        AccountCode.objects.select_for_update()
        .filter(
            email=email.lower(),
            purpose=purpose,
            code=code,
            used_at__isnull=True,
            expires_at__gte=timezone.now(),
        )
        .order_by("-created_at", "-id")
        .first()
    )
    if account_code is None:
        raise ValidationError(INVALID_CODE_MESSAGE[purpose])
    account_code.used_at = timezone.now()
    account_code.save(update_fields=["used_at"])
    return account_code


# --------------------------------------------------
# email verification
# --------------------------------------------------

def send_verification_code(user) -> AccountCode:
    return issue_code(user.email, Purpose.VERIFY_EMAIL)


def resend_verification_code(email: str) -> AccountCode:
    user = _find_user(email)
    if user is None:
        raise NotFound(USER_NOT_FOUND_MESSAGE)
    if user.is_verified:
        raise ValidationError(ALREADY_VERIFIED_MESSAGE)
    return send_verification_code(user)


def verify_email(email: str, code: str):
    with transaction.atomic():
        _consume_code(email, Purpose.VERIFY_EMAIL, code)
        user = _find_user(email)
        if user is None:
            raise NotFound(USER_NOT_FOUND_MESSAGE)
        if user.is_verified:
            raise ValidationError(ALREADY_VERIFIED_MESSAGE)
        user.is_verified = True
        user.save(update_fields=["is_verified", "updated_at"])

    logger.info("email verified user=%s", user.pk)
    return user


# --------------------------------------------------
# password reset
# --------------------------------------------------

def request_password_reset(email: str) -> None:
    """Mails a reset code when the account exists; silent otherwise."""
    user = _find_user(email)
    if user is None or not user.has_usable_password():
        logger.info("password reset requested for unknown account")
        return
    issue_code(user.email, Purpose.RESET_PASSWORD)


def reset_password(email: str, code: str, password: str) -> None:
    with transaction.atomic():
        _consume_code(email, Purpose.RESET_PASSWORD, code)
        user = _find_user(email)
        if user is None:
            raise NotFound(USER_NOT_FOUND_MESSAGE)
        user.set_password(password)
        user.save(update_fields=["password", "updated_at"])
        # older outstanding reset codes die with this one
        AccountCode.objects.filter(
            email=user.email,
            purpose=Purpose.RESET_PASSWORD,
            used_at__isnull=True,
        ).update(used_at=timezone.now())

    logger.info("password reset user=%s", user.pk)
