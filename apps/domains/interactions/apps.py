from django.apps import AppConfig


class InteractionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.domains.interactions"
    label = "interactions"
    verbose_name = "Likes & Comments"
