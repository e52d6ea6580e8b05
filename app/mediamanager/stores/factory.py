"""
Factory function for store selection.

The store class is configured with ``MEDIAMANAGER["STORE"]`` as a dotted
import path and defaults to DjangoStorageStore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from mediamanager.conf import get_settings
from mediamanager.stores.base import Store

if TYPE_CHECKING:
    from mediamanager.conf import MediaManagerSettings


def get_store(config: MediaManagerSettings | None = None) -> Store:
    """
    Instantiate the configured store.

    Usage:
        store = get_store()
        store.exists("/avatars/me.png")

    Raises:
        ImproperlyConfigured: If STORE does not name a Store subclass
    """
    config = config or get_settings()

    try:
        store_class = import_string(config.store)
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Could not import store class [{config.store}]: {e}"
        ) from e

    if not (isinstance(store_class, type) and issubclass(store_class, Store)):
        raise ImproperlyConfigured(f"[{config.store}] is not a Store subclass.")

    return store_class(config=config)
