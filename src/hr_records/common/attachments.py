"""Binary attachment helpers.

Everything here is a pure transform over ``bytes``: stored attachments are
never modified, only described (MIME type, file extension) or encoded for
display.
"""

from __future__ import annotations

import base64
import io
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError

DEFAULT_PHOTO_MIME = "image/png"
DEFAULT_DOCUMENT_MIME = "application/octet-stream"

# (magic prefix, mime, extension); order matters for the zip-based formats
_DOCUMENT_SIGNATURES = (
    (b"%PDF-", "application/pdf", "pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png", "png"),
    (b"\xff\xd8\xff", "image/jpeg", "jpg"),
    (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "application/msword", "doc"),
    (
        b"PK\x03\x04",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "docx",
    ),
)


def photo_mime(data: bytes) -> str:
    """MIME type Pillow reports for ``data``; PNG when it cannot tell."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", DEFAULT_PHOTO_MIME)
    except (UnidentifiedImageError, OSError):
        return DEFAULT_PHOTO_MIME


def ensure_image(data: bytes) -> None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Photo must be an image file.")


def sniff_document(data: bytes) -> tuple[str, str]:
    """Return ``(mime, extension)`` for a stored document."""
    for magic, mime, ext in _DOCUMENT_SIGNATURES:
        if data.startswith(magic):
            return mime, ext
    return DEFAULT_DOCUMENT_MIME, "bin"


def to_data_uri(data: Optional[bytes], mime: str) -> Optional[str]:
    if not data:
        return None
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
