"""Django app configuration for the media manager."""

from django.apps import AppConfig
from django.core import checks


class MediaManagerConfig(AppConfig):
    """Configuration for the mediamanager app."""

    name = "mediamanager"
    verbose_name = "Media Manager"

    def ready(self) -> None:
        """Connect signal handlers and register system checks."""
        from mediamanager.checks import check_configuration
        from mediamanager.signals import connect_signals

        connect_signals()
        checks.register(check_configuration, "mediamanager")
