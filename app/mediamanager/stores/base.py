"""
Abstract base class for stores.

A store is the persistence capability behind MediaManager. Paths are storage
keys such as ``/avatars/me.png``; what they map to is up to the store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediamanager.conf import MediaManagerSettings


class Store(ABC):
    """
    Persistence capability used by MediaManager.

    Implementations return False for operations they refuse for a logical
    reason (missing source, occupied destination) and let backend I/O errors
    propagate.

    Note:
        None of the operations are required to be atomic with respect to
        concurrent writers of the same path.
    """

    def __init__(self, *, config: MediaManagerSettings | None = None) -> None:
        self.config = config

    @abstractmethod
    def save(self, path: str, content: bytes) -> bool:
        """
        Write content to path, overwriting any existing file.

        Args:
            path: Storage key
            content: File content

        Returns:
            True if the content was stored under exactly ``path``.
        """

    @abstractmethod
    def delete(self, paths: Collection[str]) -> bool:
        """
        Delete every path in the collection.

        Returns:
            True if all paths existed and were deleted.
        """

    @abstractmethod
    def move(self, old_path: str, new_path: str) -> bool:
        """
        Move a file. Fails if the source is missing or the target exists.

        Returns:
            True if the file was moved.
        """

    @abstractmethod
    def copy(self, from_path: str, to_path: str) -> bool:
        """
        Copy a file. Fails if the source is missing or the target exists.

        Returns:
            True if the file was copied.
        """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a file exists at path."""
