"""
Test fixtures for the mediamanager app.

Provides fixtures for:
- Sample images generated with Pillow (PNG, JPEG, GIF, BMP) and an SVG
- A libmagic failure for exercising the default mimetype
- Settings and storages rooted in a temporary directory
- Stores and managers wired to those storages
"""

from __future__ import annotations

import base64
import io
from unittest.mock import patch

import magic
import pytest
from django.core.files.storage import FileSystemStorage
from PIL import Image

from mediamanager.conf import MediaManagerSettings
from mediamanager.manager import MediaManager
from mediamanager.stores import DjangoStorageStore, InMemoryStore
from mediamanager.validators import get_detector


# =============================================================================
# Sample Content Fixtures
# =============================================================================


def _image_bytes(fmt: str, mode: str = "RGB", color=(255, 0, 0)) -> bytes:
    image = Image.new(mode, (40, 30), color=color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def sample_png() -> bytes:
    """Generate a 40x30 PNG image with transparency."""
    return _image_bytes("PNG", mode="RGBA", color=(0, 0, 255, 128))


@pytest.fixture
def sample_jpeg() -> bytes:
    """Generate a 40x30 JPEG image."""
    return _image_bytes("JPEG")


@pytest.fixture
def sample_gif() -> bytes:
    """Generate a 40x30 GIF image."""
    return _image_bytes("GIF", mode="P", color=1)


@pytest.fixture
def sample_bmp() -> bytes:
    """Generate a 40x30 BMP image."""
    return _image_bytes("BMP")


@pytest.fixture
def sample_svg() -> bytes:
    return b'<svg xmlns="http://www.w3.org/2000/svg"></svg>'


@pytest.fixture
def unknown_binary() -> bytes:
    """Binary data that doesn't match any known format."""
    return b"\x00\x01\x02\x03\x04\x05" * 100


@pytest.fixture
def plain_text() -> bytes:
    return b"Just some plain text content.\nNothing to see here.\n"


@pytest.fixture
def sniffing_fails():
    """Make the shared detector's libmagic handle raise."""
    with patch.object(
        get_detector()._magic,
        "from_buffer",
        side_effect=magic.MagicException("cannot sniff"),
    ):
        yield


@pytest.fixture
def png_data_uri(sample_png: bytes) -> str:
    """Return the sample PNG as a base64 data URI."""
    return "data:image/png;base64," + base64.b64encode(sample_png).decode("ascii")


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path) -> MediaManagerSettings:
    """Media manager settings without a filename suffix."""
    return MediaManagerSettings.from_dict(
        {"PATH": str(tmp_path / "media"), "SUFFIX": None}
    )


@pytest.fixture
def suffixed_config(tmp_path) -> MediaManagerSettings:
    """Media manager settings with the default timestamp suffix."""
    return MediaManagerSettings.from_dict({"PATH": str(tmp_path / "media")})


@pytest.fixture
def media_settings(settings, tmp_path):
    """
    Point the "media" disk and MEDIAMANAGER at a temporary directory.

    Changing settings through pytest-django's fixture fires setting_changed,
    which resets Django's storages and the mediamanager caches.
    """
    media_root = tmp_path / "media"
    settings.MEDIA_ROOT = tmp_path
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
        "media": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": media_root},
        },
    }
    settings.MEDIAMANAGER = {"PATH": str(media_root), "SUFFIX": ""}
    return settings


# =============================================================================
# Store and Manager Fixtures
# =============================================================================


@pytest.fixture
def media_storage(tmp_path) -> FileSystemStorage:
    return FileSystemStorage(location=tmp_path / "media")


@pytest.fixture
def storage_store(media_storage, config) -> DjangoStorageStore:
    return DjangoStorageStore(media_storage, config=config)


@pytest.fixture
def memory_store(config) -> InMemoryStore:
    return InMemoryStore(config=config)


@pytest.fixture
def manager(memory_store, config) -> MediaManager:
    return MediaManager(memory_store, config=config)
