from django.apps import AppConfig


class ExploreConfig(AppConfig):
    name = "apps.domains.explore"
    label = "explore"
