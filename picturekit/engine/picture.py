"""Single entry point for resolving a responsive picture.

Flow: validate props → resolve source → pick fallback format → generate one
rendition per requested format (concurrently) plus the fallback rendition →
assemble attribute sets.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from picturekit.config import settings
from picturekit.engine.attributes import PictureDescriptor, SizingHints, assemble_picture
from picturekit.engine.constants import (
    DEFAULT_FORMATS,
    DEFAULT_OUTPUT_FORMAT,
    SUPPORTED_FORMATS,
    Encoding,
)
from picturekit.engine.errors import InvalidImageHint, UnsupportedImageFormat
from picturekit.engine.fallback import select_fallback
from picturekit.engine.source import resolve_source
from picturekit.engine.transform import EndpointTransformService, RenditionRequest, TransformService
from picturekit.engine.validation import validate_props
from picturekit.engine.variants import generate_fallback, generate_renditions

logger = logging.getLogger(__name__)

# Props consumed by the resolver; everything else is passed through to <img>.
_RESOLVER_KEYS = frozenset({
    "src",
    "formats",
    "fallback_format",
    "widths",
    "densities",
    "sizes",
    "width",
    "height",
    "quality",
    "picture_attributes",
})


def coerce_format(value: Any) -> Encoding:
    try:
        return Encoding(str(value).lower())
    except ValueError:
        raise UnsupportedImageFormat(str(value), tuple(f.value for f in SUPPORTED_FORMATS)) from None


def coerce_formats(values: Iterable[Any] | None) -> tuple[Encoding, ...]:
    """Requested formats in order, duplicates dropped."""
    if values is None:
        return DEFAULT_FORMATS
    if isinstance(values, (str, Encoding)):
        values = [values]
    return tuple(dict.fromkeys(coerce_format(v) for v in values))


def _positive(name: str, value: Any, parse) -> Any:
    try:
        number = parse(value)
    except (TypeError, ValueError):
        raise InvalidImageHint(name, value) from None
    if not number > 0:
        raise InvalidImageHint(name, value)
    return number


def coerce_densities(values: Iterable[Any] | None) -> tuple[float, ...] | None:
    # Accepts 2, 1.5 and "2x" alike.
    if values is None:
        return None
    return tuple(
        _positive("densities", v, lambda d: float(str(d).strip().rstrip("xX"))) for v in values
    )


def coerce_widths(values: Iterable[Any] | None) -> tuple[int, ...] | None:
    if values is None:
        return None
    return tuple(_positive("widths", v, int) for v in values)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


async def build_picture(
    props: Mapping[str, Any],
    service: TransformService | None = None,
    *,
    dev: bool | None = None,
) -> PictureDescriptor:
    """Resolve *props* into a PictureDescriptor.

    Raises MissingAccessibilityText before any work when ``alt`` is missing.
    Source and transform failures propagate unchanged.
    """
    validate_props(props)
    start = time.perf_counter()

    formats = coerce_formats(props.get("formats"))
    explicit_fallback = props.get("fallback_format")
    if explicit_fallback is not None:
        explicit_fallback = coerce_format(explicit_fallback)

    if service is None:
        service = EndpointTransformService(settings.image_endpoint, settings.default_quality)
    if dev is None:
        dev = settings.dev_mode

    source = await resolve_source(props["src"])
    passthrough = {k: v for k, v in props.items() if k not in _RESOLVER_KEYS}
    hints = SizingHints(
        widths=coerce_widths(props.get("widths")),
        densities=coerce_densities(props.get("densities")),
        sizes=props.get("sizes"),
    )

    base = RenditionRequest(
        source=source,
        format=DEFAULT_OUTPUT_FORMAT,
        widths=hints.widths,
        # Widths win for generation when both are given.
        densities=None if hints.widths else hints.densities,
        width=_optional_int(props.get("width")),
        height=_optional_int(props.get("height")),
        quality=_optional_int(props.get("quality")),
        options=passthrough,
    )
    fallback_format = select_fallback(explicit_fallback, source)

    renditions = await generate_renditions([replace(base, format=fmt) for fmt in formats], service)
    fallback = await generate_fallback(base, fallback_format, service)

    descriptor = assemble_picture(
        renditions,
        fallback,
        hints,
        props_attributes=passthrough,
        picture_attributes=props.get("picture_attributes"),
        dev=dev,
    )

    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Picture resolved: %d source(s), fallback %s in %.1fms",
        len(descriptor.sources),
        fallback_format,
        elapsed,
    )
    return descriptor
