"""
Configuration for the media manager.

Settings are read from the ``MEDIAMANAGER`` Django setting and merged over
the defaults below:

    MEDIAMANAGER = {
        # Root path where media is stored.
        "PATH": BASE_DIR / "uploads" / "media",
        # Supported mimetypes and the associated extension.
        "MIMETYPES": {"image/png": "png", "image/jpeg": "jpg"},
        # Alias in STORAGES used for managing files.
        "DISK": "media",
        # strftime pattern appended to filenames, e.g. @2016Dec10T154537.
        "SUFFIX": "@%Y%b%dT%H%M%S",
        # Store implementation used by get_media_manager().
        "STORE": "mediamanager.stores.DjangoStorageStore",
    }

Usage:
    from mediamanager.conf import get_settings

    config = get_settings()
    config.extension_for("image/png")  # "png"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

SETTINGS_NAME = "MEDIAMANAGER"

DEFAULT_MIMETYPES: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/svg+xml": "svg",
}

DEFAULT_DISK = "media"

DEFAULT_SUFFIX = "@%Y%b%dT%H%M%S"

DEFAULT_STORE = "mediamanager.stores.DjangoStorageStore"


def _default_path() -> str:
    return os.path.join(str(settings.MEDIA_ROOT), "media")


@dataclass(frozen=True)
class MediaManagerSettings:
    """
    Immutable media manager configuration.

    Attributes:
        path: Root directory for media
        mimetypes: Mapping of supported mimetype to file extension
        disk: Alias in Django's STORAGES setting the store binds to
        suffix: strftime pattern appended to filenames, or None for no suffix
        store: Dotted path of the Store class used by the default manager
    """

    path: str
    mimetypes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_MIMETYPES))
    )
    disk: str = DEFAULT_DISK
    suffix: str | None = DEFAULT_SUFFIX
    store: str = DEFAULT_STORE

    def __post_init__(self) -> None:
        object.__setattr__(self, "mimetypes", MappingProxyType(dict(self.mimetypes)))

    @classmethod
    def from_dict(
        cls,
        options: Mapping[str, Any],
        path: str | None = None,
    ) -> MediaManagerSettings:
        """
        Build settings from a MEDIAMANAGER-style dict.

        Raises:
            ImproperlyConfigured: If any option has the wrong shape
        """
        if not isinstance(options, Mapping):
            raise ImproperlyConfigured(
                f"{SETTINGS_NAME} must be a dict, got {type(options).__name__}."
            )

        unknown = set(options) - {"PATH", "MIMETYPES", "DISK", "SUFFIX", "STORE"}
        if unknown:
            raise ImproperlyConfigured(
                f"Unknown {SETTINGS_NAME} option(s): {', '.join(sorted(unknown))}."
            )

        mimetypes = options.get("MIMETYPES", DEFAULT_MIMETYPES)
        if not isinstance(mimetypes, Mapping) or not mimetypes:
            raise ImproperlyConfigured(
                f"{SETTINGS_NAME}['MIMETYPES'] must be a non-empty dict."
            )
        for mimetype, extension in mimetypes.items():
            if not isinstance(mimetype, str) or "/" not in mimetype:
                raise ImproperlyConfigured(
                    f"{SETTINGS_NAME}['MIMETYPES'] key {mimetype!r} is not a mimetype."
                )
            if not isinstance(extension, str) or not extension.strip("."):
                raise ImproperlyConfigured(
                    f"{SETTINGS_NAME}['MIMETYPES'][{mimetype!r}] must be a "
                    "non-empty extension string."
                )

        suffix = options.get("SUFFIX", DEFAULT_SUFFIX)
        if suffix is not None and not isinstance(suffix, str):
            raise ImproperlyConfigured(
                f"{SETTINGS_NAME}['SUFFIX'] must be a string or None."
            )

        disk = options.get("DISK", DEFAULT_DISK)
        if not isinstance(disk, str) or not disk:
            raise ImproperlyConfigured(f"{SETTINGS_NAME}['DISK'] must be a string.")

        store = options.get("STORE", DEFAULT_STORE)
        if not isinstance(store, str):
            raise ImproperlyConfigured(
                f"{SETTINGS_NAME}['STORE'] must be a dotted import path."
            )

        root = options.get("PATH", path)
        return cls(
            path=os.fspath(root) if root is not None else _default_path(),
            mimetypes={m.lower(): e.lstrip(".") for m, e in mimetypes.items()},
            disk=disk,
            # An empty pattern means no suffix
            suffix=suffix or None,
            store=store,
        )

    @classmethod
    def from_django_settings(cls) -> MediaManagerSettings:
        """Build settings from ``django.conf.settings.MEDIAMANAGER``."""
        return cls.from_dict(getattr(settings, SETTINGS_NAME, {}))

    def supports(self, mimetype: str) -> bool:
        """Check whether the mimetype is in the supported table."""
        return mimetype in self.mimetypes

    def extension_for(self, mimetype: str) -> str:
        """
        Get the configured extension for a mimetype.

        Raises:
            KeyError: If the mimetype is not supported
        """
        return self.mimetypes[mimetype]


@lru_cache(maxsize=1)
def get_settings() -> MediaManagerSettings:
    """
    Get the process-wide media manager settings.

    The value is cached; mediamanager.signals clears the cache when a
    relevant Django setting changes.
    """
    return MediaManagerSettings.from_django_settings()
