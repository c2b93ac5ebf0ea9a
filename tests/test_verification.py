from datetime import timedelta
from smtplib import SMTPException

import pytest
from django.core import mail
from django.utils import timezone

from apps.core.models import AccountCode, User

pytestmark = pytest.mark.django_db

VERIFY_URL = "/api/v1/auth/verify/"
RESEND_URL = "/api/v1/auth/resend-code/"
FORGOT_URL = "/api/v1/auth/forgot-password/"
RESET_URL = "/api/v1/auth/reset-password/"


def _latest_code(email, purpose):
    return AccountCode.objects.filter(email=email, purpose=purpose).order_by("-created_at", "-id").first()


@pytest.fixture
def broken_smtp(monkeypatch):
    def refuse(*args, **kwargs):
        raise SMTPException("relay refused")

    monkeypatch.setattr("apps.support.messaging.email.send_mail", refuse)


# --------------------------------------------------
# verification
# --------------------------------------------------

def test_resend_code_mails_a_fresh_code(api_client, user):
    response = api_client.post(RESEND_URL, {"email": "AUTHOR@example.com"}, format="json")

    assert response.status_code == 200
    assert response.json()["expires_in"] == 600
    code = _latest_code(user.email, AccountCode.Purpose.VERIFY_EMAIL)
    assert len(mail.outbox) == 1
    assert code.code in mail.outbox[0].body


def test_resend_code_unknown_or_verified(api_client, user):
    missing = api_client.post(RESEND_URL, {"email": "nobody@example.com"}, format="json")
    user.is_verified = True
    user.save(update_fields=["is_verified"])
    verified = api_client.post(RESEND_URL, {"email": user.email}, format="json")

    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "User not found"}
    assert verified.status_code == 400
    assert verified.json()["message"] == "Email already verified"


def test_verify_email_marks_user_and_issues_tokens(api_client, user):
    api_client.post(RESEND_URL, {"email": user.email}, format="json")
    code = _latest_code(user.email, AccountCode.Purpose.VERIFY_EMAIL)

    response = api_client.post(VERIFY_URL, {"email": user.email, "code": code.code}, format="json")

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["is_verified"] is True
    assert set(body["tokens"]) == {"access", "refresh"}
    user.refresh_from_db()
    code.refresh_from_db()
    assert user.is_verified is True
    assert code.used_at is not None


def test_verify_email_code_is_single_use(api_client, user):
    api_client.post(RESEND_URL, {"email": user.email}, format="json")
    code = _latest_code(user.email, AccountCode.Purpose.VERIFY_EMAIL).code

    api_client.post(VERIFY_URL, {"email": user.email, "code": code}, format="json")
    again = api_client.post(VERIFY_URL, {"email": user.email, "code": code}, format="json")

    assert again.status_code == 400
    assert again.json()["message"] == "Invalid or expired verification code"


def test_verify_email_rejects_wrong_or_expired_code(api_client, user):
    AccountCode.objects.create(
        email=user.email,
        purpose=AccountCode.Purpose.VERIFY_EMAIL,
        code="123456",
        expires_at=timezone.now() - timedelta(minutes=1),
    )

    expired = api_client.post(VERIFY_URL, {"email": user.email, "code": "123456"}, format="json")
    wrong = api_client.post(VERIFY_URL, {"email": user.email, "code": "654321"}, format="json")

    assert expired.status_code == 400
    assert wrong.status_code == 400
    user.refresh_from_db()
    assert user.is_verified is False


def test_reset_code_does_not_verify_email(api_client, user):
    api_client.post(FORGOT_URL, {"email": user.email}, format="json")
    code = _latest_code(user.email, AccountCode.Purpose.RESET_PASSWORD).code

    response = api_client.post(VERIFY_URL, {"email": user.email, "code": code}, format="json")

    assert response.status_code == 400


def test_resend_code_delivery_failure_is_upstream_error(api_client, user, broken_smtp):
    response = api_client.post(RESEND_URL, {"email": user.email}, format="json")

    assert response.status_code == 502
    assert response.json()["success"] is False
    # no usable code is left behind
    assert not AccountCode.objects.exists()


def test_signup_survives_verification_delivery_failure(api_client, broken_smtp, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        response = api_client.post(
            "/api/v1/auth/register/",
            {"email": "fresh@example.com", "password": "c0rrect-horse-battery", "full_name": "Fresh Face"},
            format="json",
        )

    assert response.status_code == 201
    assert User.objects.filter(email="fresh@example.com").exists()
    assert not AccountCode.objects.exists()


# --------------------------------------------------
# password reset
# --------------------------------------------------

def test_forgot_password_answers_the_same_for_unknown_email(api_client, user):
    known = api_client.post(FORGOT_URL, {"email": user.email}, format="json")
    unknown = api_client.post(FORGOT_URL, {"email": "ghost@example.com"}, format="json")

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert known.json()["expires_in"] == 900
    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == [user.email]


def test_reset_password_changes_login_and_burns_codes(api_client, user):
    api_client.post(FORGOT_URL, {"email": user.email}, format="json")
    first = _latest_code(user.email, AccountCode.Purpose.RESET_PASSWORD)
    api_client.post(FORGOT_URL, {"email": user.email}, format="json")
    second = _latest_code(user.email, AccountCode.Purpose.RESET_PASSWORD)

    response = api_client.post(
        RESET_URL,
        {"email": user.email, "code": second.code, "password": "n3w-Secret-phrase"},
        format="json",
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Password reset successfully"
    user.refresh_from_db()
    assert user.check_password("n3w-Secret-phrase")
    first.refresh_from_db()
    assert first.used_at is not None

    login = api_client.post(
        "/api/v1/token/",
        {"email": user.email, "password": "n3w-Secret-phrase"},
        format="json",
    )
    assert login.status_code == 200


def test_reset_password_with_bad_code_keeps_password(api_client, user):
    response = api_client.post(
        RESET_URL,
        {"email": user.email, "code": "000000", "password": "n3w-Secret-phrase"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired reset code"
    user.refresh_from_db()
    assert user.check_password("s3cure-Passw0rd!")


def test_reset_password_validates_new_password(api_client, user):
    api_client.post(FORGOT_URL, {"email": user.email}, format="json")
    code = _latest_code(user.email, AccountCode.Purpose.RESET_PASSWORD)

    response = api_client.post(
        RESET_URL,
        {"email": user.email, "code": code.code, "password": "short"},
        format="json",
    )

    assert response.status_code == 400
    assert "password" in response.json()["errors"]
    code.refresh_from_db()
    assert code.used_at is None


def test_forgot_password_delivery_failure_is_upstream_error(api_client, user, broken_smtp):
    response = api_client.post(FORGOT_URL, {"email": user.email}, format="json")

    assert response.status_code == 502
    assert not AccountCode.objects.exists()
