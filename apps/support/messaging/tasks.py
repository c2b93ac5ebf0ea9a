# apps/support/messaging/tasks.py
from celery import shared_task
from django.contrib.auth import get_user_model

from apps.support.messaging.email import TEMPLATE_WELCOME, send_email


@shared_task
def send_welcome_email_task(user_id: str) -> bool:
    user = get_user_model().objects.filter(id=user_id).first()
    if user is None:
        return False
    send_email(TEMPLATE_WELCOME, user.email, {"full_name": user.full_name})
    return True
