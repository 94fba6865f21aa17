from django.apps import AppConfig


class CommonConfig(AppConfig):
    """Shared abstract models and helpers."""

    name = "apps.common"
