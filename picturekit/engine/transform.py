"""Transform service contract and the default URL-building implementation.

The resolver never touches pixels. A transform service turns one
RenditionRequest into a Rendition: the primary URL plus a source-set of
resized variants. EndpointTransformService points those URLs at an image
endpoint (``/_image?href=...&w=...&f=webp``) that does the actual work.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol
from urllib.parse import urlencode

from picturekit.engine.constants import (
    DEFAULT_DECODING,
    DEFAULT_LOADING,
    SUPPORTED_FORMATS,
    Encoding,
)
from picturekit.engine.errors import InvalidImageHint, MissingImageDimension, UnsupportedImageFormat
from picturekit.engine.source import ImageSource, LocalImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenditionRequest:
    source: ImageSource
    format: Encoding
    widths: tuple[int, ...] | None = None
    densities: tuple[float, ...] | None = None
    width: int | None = None
    height: int | None = None
    quality: int | None = None
    # Pass-through props; they end up as attributes on the rendered element.
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Explicitly empty hint sequences mean the same as absent ones.
        if self.widths is not None:
            object.__setattr__(self, "widths", tuple(self.widths) or None)
        if self.densities is not None:
            object.__setattr__(self, "densities", tuple(self.densities) or None)


@dataclass(frozen=True)
class SrcSetEntry:
    url: str
    descriptor: str


@dataclass(frozen=True)
class Rendition:
    src: str
    format: Encoding
    srcset: tuple[SrcSetEntry, ...] = ()
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def srcset_attribute(self) -> str:
        return ", ".join(f"{entry.url} {entry.descriptor}" for entry in self.srcset)


class TransformService(Protocol):
    async def transform(self, request: RenditionRequest) -> Rendition: ...


def format_density(density: float) -> str:
    return f"{float(density):g}x"


def source_href(source: ImageSource) -> str:
    if isinstance(source, LocalImage):
        return source.src
    return source.url


def target_dimensions(request: RenditionRequest) -> tuple[int | None, int | None]:
    """Output size of the primary image.

    Local sources fill a missing side from their aspect ratio and default to
    their intrinsic size. Remote sizes are only known when given.
    """
    width, height = request.width, request.height
    source = request.source
    if isinstance(source, LocalImage) and source.has_intrinsic_size:
        if width is None and height is None:
            return source.width, source.height
        if width is None:
            width = round(height * source.aspect_ratio)
        elif height is None:
            height = round(width / source.aspect_ratio)
    return width, height


class EndpointTransformService:
    """Builds rendition URLs against an on-demand image endpoint."""

    def __init__(self, endpoint: str = "/_image", default_quality: int | None = None) -> None:
        self.endpoint = endpoint
        self.default_quality = default_quality

    async def transform(self, request: RenditionRequest) -> Rendition:
        fmt = self._output_format(request)
        width, height = target_dimensions(request)
        quality = request.quality if request.quality is not None else self.default_quality

        src = self.url_for(request.source, fmt, width, height, quality)
        srcset = self._srcset(request, fmt, width, height, quality)

        attributes: dict[str, Any] = dict(request.options)
        if width is not None:
            attributes["width"] = width
        if height is not None:
            attributes["height"] = height
        attributes.setdefault("loading", DEFAULT_LOADING)
        attributes.setdefault("decoding", DEFAULT_DECODING)

        logger.debug("Transformed %s -> %s (%d srcset entries)", source_href(request.source), fmt, len(srcset))
        return Rendition(src=src, format=fmt, srcset=srcset, attributes=attributes)

    def url_for(
        self,
        source: ImageSource,
        fmt: Encoding,
        width: int | None,
        height: int | None,
        quality: int | None,
    ) -> str:
        params: dict[str, Any] = {"href": source_href(source)}
        if width is not None:
            params["w"] = width
        if height is not None:
            params["h"] = height
        if quality is not None:
            params["q"] = quality
        params["f"] = fmt.value
        return f"{self.endpoint}?{urlencode(params)}"

    def _output_format(self, request: RenditionRequest) -> Encoding:
        try:
            fmt = Encoding(str(request.format).lower())
        except ValueError:
            raise UnsupportedImageFormat(
                str(request.format), tuple(f.value for f in SUPPORTED_FORMATS)
            ) from None
        # SVG sources always resolve to svg output.
        if isinstance(request.source, LocalImage) and request.source.format is Encoding.SVG:
            return Encoding.SVG
        return fmt

    def _srcset(
        self,
        request: RenditionRequest,
        fmt: Encoding,
        width: int | None,
        height: int | None,
        quality: int | None,
    ) -> tuple[SrcSetEntry, ...]:
        source = request.source
        max_width = None
        if isinstance(source, LocalImage) and source.has_intrinsic_size:
            max_width = source.width

        for w in request.widths or ():
            if not w > 0:
                raise InvalidImageHint("widths", w)
        for d in request.densities or ():
            if not d > 0:
                raise InvalidImageHint("densities", d)

        targets: list[tuple[int, str]] = []
        if request.widths:
            targets = [(w, f"{w}w") for w in request.widths]
        elif request.densities:
            if width is None:
                raise MissingImageDimension(source_href(source))
            targets = [(round(width * d), format_density(d)) for d in request.densities]

        entries = []
        for target_width, descriptor in targets:
            if max_width is not None:
                target_width = min(target_width, max_width)
            target_height = None
            if width and height:
                target_height = round(target_width * height / width)
            url = self.url_for(source, fmt, target_width, target_height, quality)
            entries.append(SrcSetEntry(url=url, descriptor=descriptor))
        return tuple(entries)
