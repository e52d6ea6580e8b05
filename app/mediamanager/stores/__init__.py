"""
Store package.

Provides the persistence capability behind MediaManager: an abstract Store,
a Django storage-backed implementation and an in-memory one.

Usage:
    from mediamanager.stores import get_store

    store = get_store()
    store.save("/avatars/me.png", content)
"""

from mediamanager.stores.base import Store
from mediamanager.stores.factory import get_store
from mediamanager.stores.memory import InMemoryStore
from mediamanager.stores.storage import DjangoStorageStore, storage_name

__all__ = [
    "DjangoStorageStore",
    "InMemoryStore",
    "Store",
    "get_store",
    "storage_name",
]
