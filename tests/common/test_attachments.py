from __future__ import annotations

import base64

import pytest

from hr_records.common.attachments import ensure_image, photo_mime, sniff_document, to_data_uri
from hr_records.core.exceptions import ValidationError


def test_photo_mime_uses_detected_format(png_bytes):
    assert photo_mime(png_bytes) == "image/png"


def test_photo_mime_falls_back_to_png_for_unknown_bytes():
    assert photo_mime(b"definitely not an image") == "image/png"


def test_ensure_image_rejects_non_images():
    with pytest.raises(ValidationError):
        ensure_image(b"%PDF-1.7 not a photo")


def test_ensure_image_accepts_png(png_bytes):
    ensure_image(png_bytes)


@pytest.mark.parametrize(
    "data, mime, ext",
    [
        (b"%PDF-1.4 ...", "application/pdf", "pdf"),
        (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1rest", "application/msword", "doc"),
        (b"plain text", "application/octet-stream", "bin"),
    ],
)
def test_sniff_document(data, mime, ext):
    assert sniff_document(data) == (mime, ext)


def test_to_data_uri_does_not_touch_input():
    data = b"\x00\x01binary\xff"
    original = bytes(data)
    uri = to_data_uri(data, "application/pdf")

    assert uri.startswith("data:application/pdf;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == original
    assert data == original


def test_to_data_uri_empty_is_none():
    assert to_data_uri(None, "image/png") is None
    assert to_data_uri(b"", "image/png") is None
