"""
Django signals for the media manager.

Provides handlers for:
- Cache invalidation when MEDIAMANAGER, MEDIA_ROOT or STORAGES change
"""

from __future__ import annotations

import logging

from django.core.signals import setting_changed

logger = logging.getLogger(__name__)

WATCHED_SETTINGS = frozenset({"MEDIAMANAGER", "MEDIA_ROOT", "STORAGES"})


def connect_signals():
    """
    Connect all signal handlers.

    Called from MediaManagerConfig.ready().
    """
    setting_changed.connect(
        reset_caches_on_setting_change,
        dispatch_uid="mediamanager_reset_caches",
    )

    logger.debug("Media manager signals connected")


def reset_caches() -> None:
    """Drop the cached settings and the shared MediaManager."""
    from mediamanager.conf import get_settings
    from mediamanager.manager import get_media_manager

    get_settings.cache_clear()
    get_media_manager.cache_clear()


def reset_caches_on_setting_change(sender, setting: str, **kwargs) -> None:
    """
    Reset cached configuration when a relevant setting changes.

    Args:
        sender: Settings class
        setting: Name of the changed setting
    """
    if setting not in WATCHED_SETTINGS:
        return

    reset_caches()
    logger.debug(f"Media manager caches reset after {setting} changed")
