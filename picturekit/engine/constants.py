"""Shared constant tables for picture resolution.

Nothing here is mutated at runtime; every resolution call reads the same
tables.
"""

from __future__ import annotations

import enum
import re


class Encoding(str, enum.Enum):
    """Output encodings the transform endpoint can produce."""

    JPEG = "jpeg"
    JPG = "jpg"
    PNG = "png"
    TIFF = "tiff"
    WEBP = "webp"
    GIF = "gif"
    SVG = "svg"
    AVIF = "avif"

    def __str__(self) -> str:
        return self.value


SUPPORTED_FORMATS: tuple[Encoding, ...] = tuple(Encoding)

# Local sources in these formats are their own fallback.
FALLBACK_UNFRIENDLY_FORMATS: frozenset[Encoding] = frozenset(
    {Encoding.GIF, Encoding.SVG, Encoding.JPG, Encoding.JPEG}
)

DEFAULT_FORMATS: tuple[Encoding, ...] = (Encoding.WEBP,)
DEFAULT_FALLBACK_FORMAT = Encoding.PNG

# Output format when a single transform call is made without one.
DEFAULT_OUTPUT_FORMAT = Encoding.WEBP

# Scoped-style class token: fixed prefix + exactly 8 word characters.
SCOPED_CLASS_RE = re.compile(r"\bastro-\w{8}\b")

# Props with this key prefix are copied verbatim onto <picture>.
DEBUG_ATTRIBUTE_PREFIX = "data-astro-cid"

# Added to the fallback <img> in development builds only.
DEV_MARKER_ATTRIBUTE = "data-image-component"
DEV_MARKER_VALUE = "true"

DEFAULT_LOADING = "lazy"
DEFAULT_DECODING = "async"
