"""Local asset probing: intrinsic width/height/format for files on disk.

Raster files are read through Pillow, which only parses the header on
open. SVG files are matched with regexes on the root element, the same
way the svg parser reads canvas size.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from picturekit.engine.constants import Encoding
from picturekit.engine.errors import UnsupportedImageFormat
from picturekit.engine.source import LocalImage

logger = logging.getLogger(__name__)

_SVG_TAG_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE | re.DOTALL)
_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*"([^"]+)"')
_WIDTH_RE = re.compile(r'\swidth\s*=\s*"([^"]*?)"')
_HEIGHT_RE = re.compile(r'\sheight\s*=\s*"([^"]*?)"')

# Pillow format names that differ from our encoding names.
_PIL_FORMATS = {"JPEG": Encoding.JPEG, "MPO": Encoding.JPEG}


def _svg_length(value: str) -> float | None:
    try:
        return float(value.replace("px", "").replace("pt", ""))
    except ValueError:
        return None


def _svg_size(text: str) -> tuple[int, int]:
    width = height = None
    tag_match = _SVG_TAG_RE.search(text)
    tag = tag_match.group(0) if tag_match else ""

    w_match = _WIDTH_RE.search(tag)
    h_match = _HEIGHT_RE.search(tag)
    if w_match:
        width = _svg_length(w_match.group(1))
    if h_match:
        height = _svg_length(h_match.group(1))

    if width is None or height is None:
        vb_match = _VIEWBOX_RE.search(tag)
        if vb_match:
            parts = vb_match.group(1).replace(",", " ").split()
            if len(parts) >= 4:
                width = width if width is not None else float(parts[2])
                height = height if height is not None else float(parts[3])

    return round(width or 0), round(height or 0)


def load_local_asset(path: str | Path, src: str | None = None) -> LocalImage:
    """Build a LocalImage for *path*; *src* overrides the URL recorded for it."""
    path = Path(path)
    href = src if src is not None else path.as_posix()

    if path.suffix.lower() == ".svg":
        width, height = _svg_size(path.read_text(encoding="utf-8"))
        return LocalImage(src=href, width=width, height=height, format=Encoding.SVG)

    try:
        with Image.open(path) as img:
            width, height = img.size
            pil_format = img.format or ""
    except UnidentifiedImageError:
        logger.warning("Could not identify image %s", path)
        raise UnsupportedImageFormat(
            path.suffix.lstrip(".") or "unknown", tuple(f.value for f in Encoding)
        ) from None

    fmt = _PIL_FORMATS.get(pil_format)
    if fmt is None:
        try:
            fmt = Encoding(pil_format.lower())
        except ValueError:
            raise UnsupportedImageFormat(pil_format.lower(), tuple(f.value for f in Encoding)) from None

    logger.debug("Loaded %s: %dx%d %s", path, width, height, fmt)
    return LocalImage(src=href, width=width, height=height, format=fmt)
