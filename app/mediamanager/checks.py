"""
Django system checks for the media manager configuration.

Run with ``manage.py check``:
- mediamanager.E001: MEDIAMANAGER setting is malformed
- mediamanager.E002: DISK alias is not defined in STORAGES
- mediamanager.E003: STORE does not name a Store subclass
"""

from __future__ import annotations

from django.conf import settings
from django.core import checks
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string


def check_configuration(app_configs=None, **kwargs) -> list[checks.CheckMessage]:
    """Validate MEDIAMANAGER and the storage it binds to."""
    from mediamanager.conf import MediaManagerSettings
    from mediamanager.stores.base import Store

    try:
        config = MediaManagerSettings.from_django_settings()
    except ImproperlyConfigured as e:
        return [
            checks.Error(
                str(e),
                hint="See mediamanager.conf for the supported options.",
                id="mediamanager.E001",
            )
        ]

    errors: list[checks.CheckMessage] = []

    if config.disk not in settings.STORAGES:
        errors.append(
            checks.Error(
                f"Storage alias [{config.disk}] is not defined in STORAGES.",
                hint="Add it to STORAGES or set MEDIAMANAGER['DISK'].",
                id="mediamanager.E002",
            )
        )

    try:
        store_class = import_string(config.store)
    except ImportError:
        store_class = None
    if not (isinstance(store_class, type) and issubclass(store_class, Store)):
        errors.append(
            checks.Error(
                f"[{config.store}] is not an importable Store subclass.",
                id="mediamanager.E003",
            )
        )

    return errors
