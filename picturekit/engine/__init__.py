"""Responsive picture resolution engine."""

from picturekit.engine.attributes import PictureDescriptor, SizingHints, assemble_picture
from picturekit.engine.constants import Encoding
from picturekit.engine.errors import (
    MissingAccessibilityText,
    MissingImageDimension,
    InvalidImageHint,
    PictureError,
    TransformError,
    UnsupportedImageFormat,
)
from picturekit.engine.fallback import select_fallback
from picturekit.engine.metadata import load_local_asset
from picturekit.engine.picture import build_picture
from picturekit.engine.source import LocalImage, RemoteImage, is_local_asset, resolve_source
from picturekit.engine.transform import (
    EndpointTransformService,
    Rendition,
    RenditionRequest,
    SrcSetEntry,
    TransformService,
)

__all__ = [
    "build_picture",
    "assemble_picture",
    "select_fallback",
    "resolve_source",
    "is_local_asset",
    "load_local_asset",
    "Encoding",
    "LocalImage",
    "RemoteImage",
    "Rendition",
    "RenditionRequest",
    "SrcSetEntry",
    "SizingHints",
    "PictureDescriptor",
    "TransformService",
    "EndpointTransformService",
    "PictureError",
    "MissingAccessibilityText",
    "TransformError",
    "UnsupportedImageFormat",
    "InvalidImageHint",
    "MissingImageDimension",
]
