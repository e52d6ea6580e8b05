"""
MediaManager: persists Resources through a Store.

Usage:
    from mediamanager import Resource, get_media_manager

    manager = get_media_manager()

    resource = Resource.from_data_uri(uri, pathname="avatars")
    path = manager.save(resource)           # AlreadyExistsError on collision
    path = manager.replace(resource)        # overwrite
    manager.rename(path, "me.png")          # /avatars/me.png
    manager.delete({"/avatars/me.png"})

Every operation is a single store call (save adds an existence check);
nothing is retried or rolled back, and store failures propagate unchanged.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Collection
from functools import lru_cache
from typing import TYPE_CHECKING

from mediamanager.conf import get_settings
from mediamanager.exceptions import AlreadyExistsError, InvalidPathError
from mediamanager.stores.factory import get_store

if TYPE_CHECKING:
    from mediamanager.conf import MediaManagerSettings
    from mediamanager.resource import Resource
    from mediamanager.stores.base import Store

logger = logging.getLogger(__name__)

# Splits "/a/b/file.ext" into the directory prefix "a/b/" and the filename
RENAME_PATTERN = re.compile(r"^/?((?:[^/]+/)*)(?:[^/]+)$")


class MediaManager:
    """
    Media files manager.

    Holds a reference to one store, which may be shared with other managers.
    The configured root path is cached on first use of path().
    """

    def __init__(
        self,
        store: Store | None = None,
        *,
        config: MediaManagerSettings | None = None,
    ) -> None:
        """
        Initialize the manager.

        Args:
            store: Store to persist through (defaults to get_store()).
            config: Media manager settings (defaults to get_settings()).
        """
        self.config = config or get_settings()
        self.store = store if store is not None else get_store(self.config)
        self._path: str | None = None

    def save(self, resource: Resource, replace: bool = False) -> str:
        """
        Save a resource under its path.

        The existence check and the write are two separate store calls, so
        a concurrent writer of the same path can slip in between them.

        Args:
            resource: Finalized resource
            replace: Overwrite an existing file instead of failing

        Returns:
            The path the resource was saved under

        Raises:
            AlreadyExistsError: If the path exists and replace is False
        """
        path = resource.path

        if not replace and self.store.exists(path):
            raise AlreadyExistsError(path)

        self.store.save(path, resource.raw)

        logger.info(
            "Media file saved",
            extra={
                "path": path,
                "mimetype": resource.mimetype,
                "size": resource.size,
                "replace": replace,
            },
        )
        return path

    def replace(self, resource: Resource) -> str:
        """Save a resource, overwriting any existing file."""
        return self.save(resource, replace=True)

    def delete(self, paths: Collection[str]) -> bool:
        """
        Delete a set of files.

        Args:
            paths: Collection of paths; pass a one-element set for one file

        Raises:
            TypeError: If a single string is passed instead of a collection
        """
        if isinstance(paths, (str, bytes)):
            raise TypeError(
                "delete() expects a collection of paths, e.g. {path}, not a string."
            )

        paths = frozenset(paths)
        deleted = self.store.delete(paths)
        logger.info(
            "Media files deleted",
            extra={"paths": sorted(paths), "deleted": deleted},
        )
        return deleted

    def rename(self, old_pathname: str, new_filename: str) -> bool:
        """
        Rename a file within its directory.

        Example:
            manager.rename("/docs/report.txt", "final.txt")
            # moves /docs/report.txt to /docs/final.txt

        Raises:
            InvalidPathError: If old_pathname does not end in a filename
        """
        match = RENAME_PATTERN.match(old_pathname)
        if match is None:
            raise InvalidPathError(old_pathname)

        new_pathname = "/" + match.group(1) + new_filename
        return self.move(old_pathname, new_pathname)

    def move(self, old_pathname: str, new_pathname: str) -> bool:
        moved = self.store.move(old_pathname, new_pathname)
        logger.info(
            "Media file moved",
            extra={"source": old_pathname, "target": new_pathname, "moved": moved},
        )
        return moved

    def copy(self, from_path: str, to_path: str) -> bool:
        copied = self.store.copy(from_path, to_path)
        logger.info(
            "Media file copied",
            extra={"source": from_path, "target": to_path, "copied": copied},
        )
        return copied

    def exists(self, path: str) -> bool:
        return self.store.exists(path)

    def path(self, suffix: str | None = None) -> str:
        """
        Get the media root path, optionally joined with a relative path.

        Example:
            manager.path()                # "/srv/uploads/media"
            manager.path("/avatars/")     # "/srv/uploads/media/avatars"
        """
        if self._path is None:
            self._path = self.config.path

        if suffix is None:
            return self._path

        return self._path + "/" + suffix.strip("/\\")


@lru_cache(maxsize=1)
def get_media_manager() -> MediaManager:
    """
    Get the process-wide MediaManager.

    mediamanager.signals clears the cached instance when a relevant Django
    setting changes.
    """
    return MediaManager()
