"""
Data URI decoding (RFC 2397).

    data:[<mediatype>][;param=value]*[;base64],<data>

Usage:
    from mediamanager.datauri import DataURI

    uri = DataURI.parse("data:image/png;base64,iVBORw0KGgo...")
    uri.mimetype  # "image/png"
    uri.content   # decoded bytes
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass, field
from urllib.parse import unquote_to_bytes

from mediamanager.exceptions import InvalidDataURIError

DATA_URI_RE = re.compile(
    r"^data:(?P<mimetype>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^;,]+)*?)"
    r"(?P<base64>;base64)?,(?P<data>.*)$",
    re.IGNORECASE | re.DOTALL,
)

DEFAULT_MIMETYPE = "text/plain"


def decode_base64(data: str | bytes) -> bytes:
    """
    Strictly decode base64 content, tolerating whitespace and missing padding.

    Raises:
        binascii.Error: If the content is not valid base64
    """
    if isinstance(data, str):
        data = data.encode("ascii", errors="strict")
    data = b"".join(data.split())
    data += b"=" * (-len(data) % 4)
    return base64.b64decode(data, validate=True)


@dataclass(frozen=True)
class DataURI:
    """
    A parsed data URI.

    Attributes:
        mimetype: Declared media type (text/plain when omitted)
        parameters: Extra ;key=value parameters such as charset
        is_base64: Whether the payload is base64 encoded
        data: Raw payload text after the comma
    """

    mimetype: str
    data: str
    is_base64: bool = False
    parameters: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, uri: str) -> DataURI:
        """
        Parse a data URI string.

        Raises:
            InvalidDataURIError: If the string is not a data URI
        """
        match = DATA_URI_RE.match(uri.strip()) if isinstance(uri, str) else None
        if match is None:
            raise InvalidDataURIError("The given string is not a valid data URI.")

        parameters: dict[str, str] = {}
        for param in filter(None, match.group("params").split(";")):
            key, sep, value = param.partition("=")
            if not sep:
                raise InvalidDataURIError(
                    f"The data URI parameter [{param}] is not valid."
                )
            parameters[key.strip().lower()] = value.strip()

        return cls(
            mimetype=(match.group("mimetype") or DEFAULT_MIMETYPE).lower(),
            data=match.group("data"),
            is_base64=match.group("base64") is not None,
            parameters=parameters,
        )

    @property
    def content(self) -> bytes:
        """
        Decoded payload.

        Raises:
            InvalidDataURIError: If a base64 payload cannot be decoded
        """
        if not self.is_base64:
            return unquote_to_bytes(self.data)

        try:
            return decode_base64(unquote_to_bytes(self.data))
        except (binascii.Error, ValueError) as e:
            raise InvalidDataURIError(
                "The data URI payload is not valid base64."
            ) from e
