# apps/domains/subscriptions/services.py
import logging

from django.db import IntegrityError, transaction

from apps.api.common.exceptions import Conflict

from .models import EmailSubscription

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = "This email is already subscribed to our newsletter"


def subscribe(email: str) -> tuple[EmailSubscription, bool]:
    """
    Returns (subscription, reactivated).

    active -> Conflict, inactive -> reactivated, missing -> created.
    """
    email = email.strip().lower()
    existing = EmailSubscription.objects.filter(email=email).first()
    if existing is not None:
        if existing.is_active:
            raise Conflict(ALREADY_SUBSCRIBED)
        existing.is_active = True
        existing.save(update_fields=["is_active"])
        logger.info("newsletter subscription reactivated id=%s", existing.id)
        return existing, True

    try:
        with transaction.atomic():
            subscription = EmailSubscription.objects.create(email=email, is_active=True)
    except IntegrityError as e:
        raise Conflict(ALREADY_SUBSCRIBED) from e

    logger.info("newsletter subscription created id=%s", subscription.id)
    return subscription, False
