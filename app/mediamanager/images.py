"""
Image re-encoding for image resources.

Decodes arbitrary image content with Pillow and re-encodes it to the target
format. Re-encoding strips anything that is not pixel data (trailing
payloads, metadata) and yields the image dimensions.

Functions:
    reencode_image: Decode content and encode it as the target mimetype
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from mediamanager.exceptions import InvalidImageError, UnsupportedMimetypeError
from mediamanager.validators import normalize_mimetype

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Pillow format name and save options per re-encodable mimetype
ENCODERS: dict[str, tuple[str, dict]] = {
    "image/jpeg": ("JPEG", {"quality": 100}),
    "image/png": ("PNG", {"compress_level": 0}),
    "image/gif": ("GIF", {}),
}


@dataclass(frozen=True)
class EncodedImage:
    """Result of re-encoding an image."""

    raw: bytes
    mimetype: str
    width: int
    height: int


def _convert_for_format(img: Image.Image, fmt: str) -> Image.Image:
    """Convert color mode so the target encoder accepts the image."""
    if fmt == "JPEG" and img.mode not in ("RGB", "L", "CMYK"):
        if img.mode in ("RGBA", "LA", "P"):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", img.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[-1])
            return background
        return img.convert("RGB")
    return img


def reencode_image(raw: bytes, mimetype: str) -> EncodedImage:
    """
    Decode image content and re-encode it as the given mimetype.

    Args:
        raw: Image content in any format Pillow can read
        mimetype: Target mimetype (jpeg, png or gif)

    Returns:
        EncodedImage with the new content and the image dimensions

    Raises:
        UnsupportedMimetypeError: If the target mimetype cannot be encoded
        InvalidImageError: If the content is not a decodable image
    """
    mimetype = normalize_mimetype(mimetype)
    if mimetype not in ENCODERS:
        raise UnsupportedMimetypeError(mimetype)

    fmt, options = ENCODERS[mimetype]

    try:
        with Image.open(BytesIO(raw)) as img:
            # Force load to detect truncated images early
            img.load()
            width, height = img.size
            converted = _convert_for_format(img, fmt)

            buffer = BytesIO()
            converted.save(buffer, format=fmt, **options)
    except (UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise InvalidImageError() from e
    except (OSError, SyntaxError, ValueError) as e:
        # Truncated or corrupt image data
        raise InvalidImageError(f"The given image could not be decoded: {e}") from e

    logger.debug(
        "Image re-encoded",
        extra={"mimetype": mimetype, "width": width, "height": height},
    )

    return EncodedImage(
        raw=buffer.getvalue(),
        mimetype=mimetype,
        width=width,
        height=height,
    )
