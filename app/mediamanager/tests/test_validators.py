"""
Tests for mimetype detection.

These tests verify:
- Content-based MIME type detection using python-magic
- Generic libmagic answers validated like any other type
- Fallback to the default mimetype when libmagic fails
- Alias normalization
"""

from __future__ import annotations

from unittest.mock import patch

import magic
import pytest

from mediamanager.exceptions import UnknownMimetypeError, UnsupportedMimetypeError
from mediamanager.validators import (
    MimetypeDetector,
    get_detector,
    normalize_mimetype,
    resolve_mimetype,
)

SUPPORTED = {"image/png": "png", "image/jpeg": "jpg", "image/gif": "gif"}


class TestDetect:
    """Tests for content-based detection."""

    def test_detect_png(self, sample_png):
        assert MimetypeDetector().detect(sample_png) == "image/png"

    def test_detect_jpeg(self, sample_jpeg):
        assert MimetypeDetector().detect(sample_jpeg) == "image/jpeg"

    def test_detect_gif(self, sample_gif):
        assert MimetypeDetector().detect(sample_gif) == "image/gif"

    def test_detect_bmp(self, sample_bmp):
        assert MimetypeDetector().detect(sample_bmp) == "image/bmp"

    def test_detect_svg(self, sample_svg):
        assert MimetypeDetector().detect(sample_svg) == "image/svg+xml"

    def test_empty_content(self):
        assert MimetypeDetector().detect(b"") == "application/x-empty"

    def test_unknown_binary(self, unknown_binary):
        assert MimetypeDetector().detect(unknown_binary) == "application/octet-stream"

    def test_empty_answer_is_inconclusive(self, sample_png):
        detector = MimetypeDetector()

        with patch.object(detector._magic, "from_buffer", return_value=""):
            assert detector.detect(sample_png) is None

    def test_libmagic_error_is_inconclusive(self, sample_png):
        detector = MimetypeDetector()

        with patch.object(
            detector._magic, "from_buffer", side_effect=magic.MagicException("boom")
        ):
            assert detector.detect(sample_png) is None

    def test_alias_is_normalized(self, sample_png):
        detector = MimetypeDetector()

        with patch.object(detector._magic, "from_buffer", return_value="image/x-ms-bmp"):
            assert detector.detect(sample_png) == "image/bmp"


class TestNormalize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("image/jpg", "image/jpeg"),
            ("Image/PJPEG", "image/jpeg"),
            ("image/x-png", "image/png"),
            ("image/x-bmp", "image/bmp"),
            ("image/svg", "image/svg+xml"),
            ("text/plain; charset=utf-8", "text/plain"),
            ("image/gif", "image/gif"),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_mimetype(value) == expected


class TestResolve:
    """Tests for detection plus allow-list validation."""

    def test_sniffed_type_wins_over_default(self, sample_png):
        assert resolve_mimetype(sample_png, "image/gif", SUPPORTED) == "image/png"

    def test_default_used_when_sniffing_fails(self, sample_png, sniffing_fails):
        assert resolve_mimetype(sample_png, "image/jpg", SUPPORTED) == "image/jpeg"

    def test_unknown_without_default(self, sample_png, sniffing_fails):
        with pytest.raises(UnknownMimetypeError):
            resolve_mimetype(sample_png, None, SUPPORTED)

    def test_unsupported_sniffed_type(self, plain_text):
        with pytest.raises(UnsupportedMimetypeError) as exc_info:
            resolve_mimetype(plain_text, "image/png", SUPPORTED)

        assert exc_info.value.mimetype == "text/plain"
        assert exc_info.value.error_code == "UNSUPPORTED_MIMETYPE"

    def test_unidentified_content_ignores_default(self, unknown_binary):
        with pytest.raises(UnsupportedMimetypeError) as exc_info:
            resolve_mimetype(unknown_binary, "image/png", SUPPORTED)

        assert exc_info.value.mimetype == "application/octet-stream"

    def test_empty_content_ignores_default(self):
        with pytest.raises(UnsupportedMimetypeError) as exc_info:
            resolve_mimetype(b"", "image/png", SUPPORTED)

        assert exc_info.value.mimetype == "application/x-empty"

    def test_unsupported_default(self, sample_png, sniffing_fails):
        with pytest.raises(UnsupportedMimetypeError) as exc_info:
            resolve_mimetype(sample_png, "application/zip", SUPPORTED)

        assert exc_info.value.details == {"mimetype": "application/zip"}


class TestSharedDetector:
    def test_detector_is_shared(self):
        assert get_detector() is get_detector()
        assert isinstance(get_detector(), MimetypeDetector)
