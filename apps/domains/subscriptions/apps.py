from django.apps import AppConfig


class SubscriptionsConfig(AppConfig):
    name = "apps.domains.subscriptions"
    label = "subscriptions"
