"""Format fallback selector."""

from __future__ import annotations

from picturekit.engine.constants import (
    DEFAULT_FALLBACK_FORMAT,
    FALLBACK_UNFRIENDLY_FORMATS,
    Encoding,
)
from picturekit.engine.source import ImageSource, LocalImage


def select_fallback(explicit: Encoding | None, source: ImageSource) -> Encoding:
    """Pick the single encoding used by the fallback <img>.

    An explicit override always wins. Local gif/svg/jpg/jpeg sources keep
    their own format; everything else falls back to png.
    """
    if explicit is not None:
        return explicit
    if isinstance(source, LocalImage) and source.format in FALLBACK_UNFRIENDLY_FORMATS:
        return source.format
    return DEFAULT_FALLBACK_FORMAT
