"""
Exception classes for the media manager.

Exception Hierarchy:
    MediaManagerError (base)
    ├── AlreadyExistsError - Target path is occupied and replace was not requested
    ├── InvalidPathError - Path cannot be split into directory and filename
    └── MediaResourceError - Content could not be turned into a Resource
        ├── UnknownMimetypeError - Sniffing and default both failed
        ├── UnsupportedMimetypeError - Mimetype not in the configured table
        ├── InvalidImageError - Content is not a decodable image
        └── InvalidDataURIError - Malformed data URI

Usage:
    from mediamanager.exceptions import AlreadyExistsError

    try:
        path = manager.save(resource)
    except AlreadyExistsError as e:
        path = manager.replace(resource)

    # Convert to dict for API response
    except MediaManagerError as e:
        return Response(e.to_dict(), status=400)

Note:
    Store failures (I/O errors raised by the storage backend) are not wrapped;
    they propagate unchanged to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class MediaManagerError(Exception):
    """
    Base exception for all media manager errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (path, mimetype, etc.)
    """

    default_error_code: str = "MEDIA_MANAGER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "The file [/avatars/a.png] already exists. ...",
                "error_code": "FILE_ALREADY_EXISTS",
                "details": {"path": "/avatars/a.png"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class AlreadyExistsError(MediaManagerError):
    """
    Raised when saving onto an existing path without asking to replace it.

    Example:
        raise AlreadyExistsError("/avatars/a.png")
    """

    default_error_code: str = "FILE_ALREADY_EXISTS"

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"The file [{path}] already exists. "
            "If you want to overwrite, use the replace() method instead.",
            details={"path": path},
        )


class InvalidPathError(MediaManagerError):
    """Raised when rename() cannot extract the directory portion of a path."""

    default_error_code: str = "INVALID_PATH"

    def __init__(self, old_pathname: str):
        self.old_pathname = old_pathname
        super().__init__(
            f"The location of the file to be renamed [{old_pathname}] is not valid.",
            details={"old_pathname": old_pathname},
        )


class MediaResourceError(MediaManagerError):
    """
    Raised when raw content cannot be turned into a valid Resource.

    Use directly for decoding failures that have no dedicated subclass
    (for example malformed base64 input).
    """

    default_error_code: str = "INVALID_RESOURCE"


class UnknownMimetypeError(MediaResourceError):
    """Raised when content sniffing fails and no default mimetype was given."""

    default_error_code: str = "UNKNOWN_MIMETYPE"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "The mimetype of the loaded resource could not be detected."
        )


class UnsupportedMimetypeError(MediaResourceError):
    """Raised when the resolved mimetype is not in the configured table."""

    default_error_code: str = "UNSUPPORTED_MIMETYPE"

    def __init__(self, mimetype: str):
        self.mimetype = mimetype
        super().__init__(
            f"The mime type of the loaded media resource [{mimetype}] is not supported.",
            details={"mimetype": mimetype},
        )


class InvalidImageError(MediaResourceError):
    """Raised when image content cannot be decoded by Pillow."""

    default_error_code: str = "INVALID_IMAGE"

    def __init__(self, message: str | None = None):
        super().__init__(message or "The given content is not a valid image.")


class InvalidDataURIError(MediaResourceError):
    """Raised when a data URI is malformed or its payload cannot be decoded."""

    default_error_code: str = "INVALID_DATA_URI"
