# apps/support/messaging/email.py
"""
Transactional email.

Templates are plain-text subject/body pairs rendered with ``str.format``;
``params`` supplies the placeholders.
"""

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail

from apps.api.common.exceptions import UpstreamError

logger = logging.getLogger(__name__)

TEMPLATE_WELCOME = "welcome"
TEMPLATE_VERIFY_EMAIL = "verify_email"
TEMPLATE_PASSWORD_RESET = "password_reset"

TEMPLATES = {
    TEMPLATE_WELCOME: {
        "subject": "Welcome to {app_name}, {full_name}!",
        "body": (
            "Hi {full_name},\n\n"
            "Thanks for joining {app_name}. Start writing your first post "
            "or explore what others are publishing.\n\n"
            "The {app_name} team"
        ),
    },
    TEMPLATE_VERIFY_EMAIL: {
        "subject": "{app_name} - Your Verification Code",
        "body": (
            "Your verification code is:\n\n"
            "    {code}\n\n"
            "It expires in {expires_minutes} minutes. If you did not create an "
            "account, ignore this email.\n\n"
            "The {app_name} team"
        ),
    },
    TEMPLATE_PASSWORD_RESET: {
        "subject": "{app_name} - Password Reset Request",
        "body": (
            "Use this code to reset your password:\n\n"
            "    {code}\n\n"
            "It expires in {expires_minutes} minutes. If you did not ask for a "
            "reset, your password stays unchanged.\n\n"
            "The {app_name} team"
        ),
    },
}


def render(template: str, params: dict) -> tuple[str, str]:
    try:
        spec = TEMPLATES[template]
    except KeyError:
        raise ValueError(f"unknown email template: {template}")
    context = {"app_name": settings.APP_NAME, **params}
    return spec["subject"].format(**context), spec["body"].format(**context)


def send_email(template: str, recipient: str, params: dict) -> None:
    subject, body = render(template, params)
    send_mail(
        subject,
        body,
        settings.DEFAULT_FROM_EMAIL,
        [recipient],
        fail_silently=False,
    )
    logger.info("email sent template=%s to=%s", template, recipient)


def send_critical_email(template: str, recipient: str, params: dict) -> None:
    """Synchronous send for one-time codes; delivery failure fails the operation."""
    try:
        send_email(template, recipient, params)
    except (SMTPException, OSError) as e:
        logger.error("email delivery failed template=%s to=%s: %s", template, recipient, e)
        raise UpstreamError("Failed to send email. Please try again later.") from e
