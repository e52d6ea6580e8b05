"""
Store backed by a Django storage backend.

The store binds to the storage configured under the ``DISK`` alias in
Django's STORAGES setting, so media can live on local disk
(FileSystemStorage) or any remote backend (django-storages S3, etc.)
without changes here.

    STORAGES = {
        "default": {...},
        "media": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": MEDIA_ROOT / "media"},
        },
    }
"""

from __future__ import annotations

import logging
import os
from collections.abc import Collection
from typing import TYPE_CHECKING

from django.core.files.base import ContentFile
from django.core.files.move import file_move_safe
from django.core.files.storage import FileSystemStorage, storages

from mediamanager.conf import get_settings
from mediamanager.stores.base import Store

if TYPE_CHECKING:
    from django.core.files.storage import Storage

    from mediamanager.conf import MediaManagerSettings

logger = logging.getLogger(__name__)


def storage_name(path: str) -> str:
    """
    Convert a media path into a storage name.

    Django storages resolve names relative to their root, so the leading
    slash of media paths is dropped.

    Example:
        storage_name("/avatars/me.png")  # "avatars/me.png"
    """
    name = path.lstrip("/")
    if not name:
        raise ValueError(f"Path [{path}] does not name a file.")
    return name


class DjangoStorageStore(Store):
    """
    Store implementation over ``django.core.files.storage``.

    Usage:
        store = DjangoStorageStore()                     # STORAGES[DISK]
        store = DjangoStorageStore(FileSystemStorage(location="/tmp/media"))
        store.save("/avatars/me.png", content)
    """

    def __init__(
        self,
        storage: Storage | None = None,
        *,
        config: MediaManagerSettings | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            storage: Storage instance to use. Defaults to the backend
                     registered under the configured DISK alias.
            config: Media manager settings (defaults to get_settings()).

        Raises:
            django.core.files.storage.InvalidStorageError: If the DISK alias
                is not defined in STORAGES.
        """
        config = config or get_settings()
        super().__init__(config=config)
        self.disk = config.disk
        self.storage = storage if storage is not None else storages[self.disk]

    def save(self, path: str, content: bytes) -> bool:
        name = storage_name(path)

        # Storage.save() never overwrites; it picks an alternative name instead
        if self.storage.exists(name):
            self.storage.delete(name)

        saved_name = self.storage.save(name, ContentFile(content))
        if saved_name != name:
            logger.warning(
                "Storage saved file under a different name",
                extra={"path": path, "saved_name": saved_name, "disk": self.disk},
            )
            return False
        return True

    def delete(self, paths: Collection[str]) -> bool:
        deleted_all = True
        for path in paths:
            name = storage_name(path)
            if not self.storage.exists(name):
                logger.warning(
                    "Cannot delete missing file",
                    extra={"path": path, "disk": self.disk},
                )
                deleted_all = False
                continue
            self.storage.delete(name)
        return deleted_all

    def move(self, old_path: str, new_path: str) -> bool:
        source, target = storage_name(old_path), storage_name(new_path)
        if not self._can_transfer(source, target, "move"):
            return False

        if isinstance(self.storage, FileSystemStorage):
            target_path = self.storage.path(target)
            os.makedirs(os.path.dirname(target_path), exist_ok=True)
            file_move_safe(self.storage.path(source), target_path)
            return True

        # Remote storages have no native rename
        if not self._copy(source, target):
            return False
        self.storage.delete(source)
        return True

    def copy(self, from_path: str, to_path: str) -> bool:
        source, target = storage_name(from_path), storage_name(to_path)
        if not self._can_transfer(source, target, "copy"):
            return False
        return self._copy(source, target)

    def exists(self, path: str) -> bool:
        return self.storage.exists(storage_name(path))

    def _can_transfer(self, source: str, target: str, operation: str) -> bool:
        if not self.storage.exists(source):
            logger.warning(
                f"Cannot {operation} missing file",
                extra={"source": source, "target": target, "disk": self.disk},
            )
            return False
        if self.storage.exists(target):
            logger.warning(
                f"Cannot {operation} onto existing file",
                extra={"source": source, "target": target, "disk": self.disk},
            )
            return False
        return True

    def _copy(self, source: str, target: str) -> bool:
        with self.storage.open(source, "rb") as f:
            saved_name = self.storage.save(target, ContentFile(f.read()))
        if saved_name != target:
            logger.warning(
                "Storage copied file under a different name",
                extra={"target": target, "saved_name": saved_name, "disk": self.disk},
            )
            self.storage.delete(saved_name)
            return False
        return True
