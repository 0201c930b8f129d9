"""MIME lookup for <source type="...">."""

from __future__ import annotations

import mimetypes

_mimes = mimetypes.MimeTypes()
_mimes.add_type("image/webp", ".webp")
_mimes.add_type("image/avif", ".avif")
_mimes.add_type("image/svg+xml", ".svg")
_mimes.add_type("image/jpeg", ".jpg")
_mimes.add_type("image/jpeg", ".jpeg")
_mimes.add_type("image/tiff", ".tiff")


def mime_type_for(format_or_url: str) -> str | None:
    """Look up a MIME type from a bare format name ("webp") or a URL/path."""
    value = str(format_or_url)
    if "." not in value and "/" not in value:
        value = f"file.{value}"
    mime, _ = _mimes.guess_type(value, strict=False)
    return mime


def source_type(fmt: str, url: str = "") -> str:
    """MIME type for a rendition, synthesizing ``image/{fmt}`` when unknown."""
    return mime_type_for(fmt) or (mime_type_for(url) if url else None) or f"image/{fmt}"
