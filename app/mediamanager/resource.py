"""
File resources.

A Resource wraps raw file content together with its validated mimetype and
the filename and path it will be stored under. Resources are built in two
phases:

    builder = ResourceBuilder.from_data_uri(uri)   # detect + validate
    builder.set_pathname("avatars").set_filename("me")
    resource = builder.finalize()                  # immutable from here on

    resource.path  # "/avatars/me@2016Dec10T154537.png"

Or in one step:

    resource = Resource.from_base64(payload, "image/png", pathname="avatars")

The random base name and the time-based suffix are computed exactly once, in
finalize(), so every read of ``resource.path`` returns the same string.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from django.utils import timezone
from django.utils.crypto import get_random_string

from mediamanager.conf import get_settings
from mediamanager.datauri import DataURI, decode_base64
from mediamanager.exceptions import MediaResourceError, UnsupportedMimetypeError
from mediamanager.images import reencode_image
from mediamanager.validators import resolve_mimetype

if TYPE_CHECKING:
    from mediamanager.conf import MediaManagerSettings

# Length of generated base names
RANDOM_FILENAME_LENGTH = 16


def normalize_pathname(pathname: str) -> str:
    """
    Normalize a directory path to one leading slash and no trailing slash.

    The root directory collapses to an empty string so that joining it with
    a filename never produces a double slash.

    Example:
        normalize_pathname("a/b/")  # "/a/b"
        normalize_pathname("/")     # ""
    """
    pathname = pathname.strip("/")
    return f"/{pathname}" if pathname else ""


def format_suffix(pattern: str | None, now: datetime | None = None) -> str:
    """Format the filename suffix pattern with the given (or current) time."""
    if not pattern:
        return ""
    if now is None:
        now = timezone.now()
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    return now.strftime(pattern)


@dataclass(frozen=True)
class Resource:
    """
    Immutable file resource.

    Attributes:
        raw: File content
        mimetype: Validated mimetype (a key of the configured table)
        extension: File extension without the dot
        basename: Base name, without suffix and extension
        suffix: Formatted time suffix ("" when disabled)
        pathname: Directory portion ("" for the root, otherwise "/a/b")
        width: Image width, for resources built from image data URIs
        height: Image height, for resources built from image data URIs
    """

    raw: bytes
    mimetype: str
    extension: str
    basename: str
    suffix: str = ""
    pathname: str = ""
    width: int | None = None
    height: int | None = None

    @property
    def filename(self) -> str:
        """Full filename: base name, suffix and extension."""
        return f"{self.basename}{self.suffix}.{self.extension}"

    @property
    def path(self) -> str:
        """Full storage key: pathname and filename."""
        return f"{self.pathname}/{self.filename}"

    @property
    def size(self) -> int:
        return len(self.raw)

    def __repr__(self) -> str:
        return (
            f"Resource(path={self.path!r}, mimetype={self.mimetype!r}, "
            f"size={self.size})"
        )

    # -------------------------------------------------------------------------
    # One-step constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw(
        cls,
        raw: bytes,
        mimetype: str | None = None,
        *,
        filename: str | None = None,
        extension: str | None = None,
        pathname: str | None = None,
        config: MediaManagerSettings | None = None,
    ) -> Resource:
        builder = ResourceBuilder.from_raw(raw, mimetype, config=config)
        return builder._configure(filename, extension, pathname).finalize()

    @classmethod
    def from_base64(
        cls,
        encoded_content: str | bytes,
        mimetype: str | None = None,
        *,
        filename: str | None = None,
        extension: str | None = None,
        pathname: str | None = None,
        config: MediaManagerSettings | None = None,
    ) -> Resource:
        builder = ResourceBuilder.from_base64(encoded_content, mimetype, config=config)
        return builder._configure(filename, extension, pathname).finalize()

    @classmethod
    def from_data_uri(
        cls,
        uri: str,
        *,
        filename: str | None = None,
        extension: str | None = None,
        pathname: str | None = None,
        config: MediaManagerSettings | None = None,
    ) -> Resource:
        builder = ResourceBuilder.from_data_uri(uri, config=config)
        return builder._configure(filename, extension, pathname).finalize()

    @classmethod
    def from_image_data_uri(
        cls,
        uri: str,
        mimetype: str | None = None,
        *,
        filename: str | None = None,
        pathname: str | None = None,
        config: MediaManagerSettings | None = None,
    ) -> Resource:
        builder = ResourceBuilder.from_image_data_uri(uri, mimetype, config=config)
        return builder._configure(filename, None, pathname).finalize()


class ResourceBuilder:
    """
    Mutable phase of a Resource.

    Construction always validates the mimetype against the configured table;
    the name and location can then be adjusted until finalize() is called.
    Instances are created through the ``from_*`` class methods.

    Example:
        builder = ResourceBuilder.from_raw(content, "image/png")
        builder.set_filename("logo", "PNG").set_pathname("/brand/")
        builder.pathname  # "/brand"
        resource = builder.finalize()
    """

    def __init__(
        self,
        raw: bytes,
        mimetype: str,
        config: MediaManagerSettings,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        self._raw = raw
        self._mimetype = mimetype
        self._config = config
        self._width = width
        self._height = height
        self._filename: str | None = None
        self._extension: str | None = None
        self._pathname = ""

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw(
        cls,
        raw: bytes,
        mimetype: str | None = None,
        *,
        config: MediaManagerSettings | None = None,
    ) -> ResourceBuilder:
        """
        Build from raw content, sniffing its mimetype.

        Args:
            raw: File content
            mimetype: Default used when the content type cannot be sniffed
            config: Settings to validate against (defaults to get_settings())

        Raises:
            UnknownMimetypeError: If no mimetype could be determined
            UnsupportedMimetypeError: If the mimetype is not configured
        """
        config = config or get_settings()
        raw = bytes(raw)
        return cls(raw, resolve_mimetype(raw, mimetype, config.mimetypes), config)

    @classmethod
    def from_base64(
        cls,
        encoded_content: str | bytes,
        mimetype: str | None = None,
        *,
        config: MediaManagerSettings | None = None,
    ) -> ResourceBuilder:
        """
        Build from base64 encoded content.

        Raises:
            MediaResourceError: If the content is not valid base64
        """
        try:
            raw = decode_base64(encoded_content)
        except (binascii.Error, ValueError) as e:
            raise MediaResourceError(
                "The given content is not valid base64."
            ) from e
        return cls.from_raw(raw, mimetype, config=config)

    @classmethod
    def from_data_uri(
        cls,
        uri: str,
        *,
        config: MediaManagerSettings | None = None,
    ) -> ResourceBuilder:
        """Build from a data URI, using its declared mimetype as the default."""
        data_uri = DataURI.parse(uri)
        return cls.from_raw(data_uri.content, data_uri.mimetype, config=config)

    @classmethod
    def from_image_data_uri(
        cls,
        uri: str,
        mimetype: str | None = None,
        *,
        config: MediaManagerSettings | None = None,
    ) -> ResourceBuilder:
        """
        Build an image resource from a data URI.

        The image is decoded and re-encoded as ``mimetype`` (or the mimetype
        declared in the URI), which also records its dimensions.

        Raises:
            InvalidImageError: If the payload is not a decodable image
            UnsupportedMimetypeError: If the target mimetype is not an
                encodable image type or not configured
        """
        config = config or get_settings()
        data_uri = DataURI.parse(uri)
        image = reencode_image(data_uri.content, mimetype or data_uri.mimetype)

        if not config.supports(image.mimetype):
            raise UnsupportedMimetypeError(image.mimetype)

        return cls(
            image.raw,
            image.mimetype,
            config,
            width=image.width,
            height=image.height,
        )

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def set_filename(
        self,
        filename: str,
        extension: str | None = None,
    ) -> ResourceBuilder:
        """Fix the base name, and optionally the extension."""
        self._filename = filename
        if extension is not None:
            self.set_extension(extension)
        return self

    def set_extension(self, extension: str) -> ResourceBuilder:
        self._extension = extension.lstrip(".")
        return self

    def set_pathname(self, pathname: str) -> ResourceBuilder:
        self._pathname = normalize_pathname(pathname)
        return self

    def _configure(
        self,
        filename: str | None,
        extension: str | None,
        pathname: str | None,
    ) -> ResourceBuilder:
        if filename is not None:
            self.set_filename(filename)
        if extension is not None:
            self.set_extension(extension)
        if pathname is not None:
            self.set_pathname(pathname)
        return self

    # -------------------------------------------------------------------------
    # Getters
    # -------------------------------------------------------------------------

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def mimetype(self) -> str:
        return self._mimetype

    @property
    def filename(self) -> str | None:
        """Base name, or None until set (finalize() generates one)."""
        return self._filename

    @property
    def extension(self) -> str:
        """Explicit extension, or the one configured for the mimetype."""
        if self._extension is not None:
            return self._extension
        return self._config.extension_for(self._mimetype)

    @property
    def pathname(self) -> str:
        return self._pathname

    @property
    def width(self) -> int | None:
        return self._width

    @property
    def height(self) -> int | None:
        return self._height

    # -------------------------------------------------------------------------
    # Finalization
    # -------------------------------------------------------------------------

    def finalize(self, now: datetime | None = None) -> Resource:
        """
        Produce the immutable Resource.

        Generates a random base name if none was set and formats the
        configured suffix pattern with ``now`` (defaults to the current time).
        """
        return Resource(
            raw=self._raw,
            mimetype=self._mimetype,
            extension=self.extension,
            basename=self._filename or get_random_string(RANDOM_FILENAME_LENGTH),
            suffix=format_suffix(self._config.suffix, now),
            pathname=self._pathname,
            width=self._width,
            height=self._height,
        )
