"""
Mimetype detection and validation.

Provides content-based MIME type detection using python-magic. Resource
mimetypes come from the content first; a caller-supplied default is only
used when libmagic fails or returns nothing. Generic answers such as
``application/octet-stream`` are real results and go through the allow-list.
"""

from __future__ import annotations

import logging
from collections.abc import Container

import magic

from mediamanager.exceptions import UnknownMimetypeError, UnsupportedMimetypeError

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

# Bytes read for magic number detection
SNIFF_LENGTH = 2048

# Non-canonical names reported by libmagic versions or sent by clients
MIME_TYPE_ALIASES: dict[str, str] = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
    "image/x-png": "image/png",
    "image/x-ms-bmp": "image/bmp",
    "image/x-bmp": "image/bmp",
    "image/svg": "image/svg+xml",
}


def normalize_mimetype(mimetype: str) -> str:
    """
    Canonicalize a mimetype string.

    Lower-cases, drops parameters (``; charset=...``) and maps known aliases.

    Example:
        normalize_mimetype("Image/JPG")  # "image/jpeg"
    """
    mimetype = mimetype.split(";", 1)[0].strip().lower()
    return MIME_TYPE_ALIASES.get(mimetype, mimetype)


# =============================================================================
# Detector Class
# =============================================================================


class MimetypeDetector:
    """
    Detects mimetypes from raw content using libmagic.

    Example:
        detector = MimetypeDetector()
        detector.detect(png_bytes)  # "image/png"
        detector.detect(b"")  # "application/x-empty"
    """

    def __init__(self) -> None:
        self._magic = magic.Magic(mime=True)

    def detect(self, raw: bytes) -> str | None:
        """
        Detect the mimetype of raw content.

        Returns:
            Normalized mimetype, or None if libmagic fails or returns an
            empty answer. Empty content is reported by libmagic as
            ``application/x-empty``.
        """
        try:
            mimetype = self._magic.from_buffer(raw[:SNIFF_LENGTH])
        except magic.MagicException as e:
            logger.debug("Mimetype sniffing failed: %s", e)
            return None

        if not mimetype:
            return None
        return normalize_mimetype(mimetype)

    def resolve(
        self,
        raw: bytes,
        default: str | None,
        supported: Container[str],
    ) -> str:
        """
        Resolve and validate the mimetype of raw content.

        Args:
            raw: File content
            default: Mimetype to use when libmagic yields no answer
            supported: Allowed mimetypes

        Returns:
            The validated mimetype

        Raises:
            UnknownMimetypeError: If neither sniffing nor the default yields a type
            UnsupportedMimetypeError: If the resulting type is not supported
        """
        mimetype = self.detect(raw)

        if mimetype is None:
            if not default:
                raise UnknownMimetypeError()
            mimetype = normalize_mimetype(default)
            logger.debug(
                "Mimetype sniffing failed, using default",
                extra={"mimetype": mimetype},
            )

        if mimetype not in supported:
            raise UnsupportedMimetypeError(mimetype)

        return mimetype


# =============================================================================
# Convenience Function
# =============================================================================


_detector = MimetypeDetector()


def get_detector() -> MimetypeDetector:
    """Get the shared detector."""
    return _detector


def resolve_mimetype(
    raw: bytes,
    default: str | None,
    supported: Container[str],
) -> str:
    """Resolve the mimetype of raw content with the shared detector."""
    return get_detector().resolve(raw, default, supported)
