from django.apps import AppConfig


class VideoMarkupConfig(AppConfig):
    """App configuration for the video markup text formatter settings."""

    name = "apps.videomarkup"
    verbose_name = "Video Markup"
