"""In-memory store, for tests and throwaway environments."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

from mediamanager.stores.base import Store

if TYPE_CHECKING:
    from mediamanager.conf import MediaManagerSettings

logger = logging.getLogger(__name__)


class InMemoryStore(Store):
    """
    Dict-backed store.

    Follows the same contract as DjangoStorageStore: ``save`` overwrites,
    ``move`` and ``copy`` refuse missing sources and occupied targets.

    Usage:
        store = InMemoryStore()
        manager = MediaManager(store)
        manager.save(resource)
        store.files[resource.path]  # resource.raw
    """

    def __init__(
        self,
        files: dict[str, bytes] | None = None,
        *,
        config: MediaManagerSettings | None = None,
    ) -> None:
        super().__init__(config=config)
        self.files: dict[str, bytes] = dict(files or {})

    def save(self, path: str, content: bytes) -> bool:
        self.files[path] = bytes(content)
        return True

    def delete(self, paths: Collection[str]) -> bool:
        deleted_all = True
        for path in paths:
            if self.files.pop(path, None) is None:
                logger.warning("Cannot delete missing file", extra={"path": path})
                deleted_all = False
        return deleted_all

    def move(self, old_path: str, new_path: str) -> bool:
        if not self.copy(old_path, new_path):
            return False
        del self.files[old_path]
        return True

    def copy(self, from_path: str, to_path: str) -> bool:
        if from_path not in self.files or to_path in self.files:
            logger.warning(
                "Cannot transfer file",
                extra={"source": from_path, "target": to_path},
            )
            return False
        self.files[to_path] = self.files[from_path]
        return True

    def exists(self, path: str) -> bool:
        return path in self.files
