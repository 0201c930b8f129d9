"""Attribute assembler: turns renditions into <picture> attribute sets.

All attribute sets are plain ordered dicts; when two steps write the same
key the later write wins.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from picturekit.engine.constants import (
    DEBUG_ATTRIBUTE_PREFIX,
    DEV_MARKER_ATTRIBUTE,
    DEV_MARKER_VALUE,
    SCOPED_CLASS_RE,
)
from picturekit.engine.mime import source_type
from picturekit.engine.transform import Rendition


@dataclass(frozen=True)
class SizingHints:
    widths: tuple[int, ...] | None = None
    densities: tuple[float, ...] | None = None
    sizes: str | None = None

    def __post_init__(self) -> None:
        if self.widths is not None:
            object.__setattr__(self, "widths", tuple(self.widths) or None)
        if self.densities is not None:
            object.__setattr__(self, "densities", tuple(self.densities) or None)

    @property
    def lists_primary_url(self) -> bool:
        """Density hints (or no hints at all) keep the base URL in the srcset."""
        return self.densities is not None or self.widths is None


@dataclass
class SourceAttributes:
    srcset: str
    type: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class FallbackImage:
    src: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class PictureDescriptor:
    sources: list[SourceAttributes]
    fallback: FallbackImage
    picture_attributes: dict[str, Any] = field(default_factory=dict)


def format_source_srcset(rendition: Rendition, hints: SizingHints) -> str:
    """srcset for one <source>.

    Density descriptors are alternatives to the base image, so the base URL
    leads. Width descriptors are a complete set, so it is left out.
    """
    if hints.lists_primary_url:
        if rendition.srcset:
            return f"{rendition.src}, {rendition.srcset_attribute}"
        return rendition.src
    return rendition.srcset_attribute


def merge_picture_attributes(
    picture_attributes: Mapping[str, Any] | None,
    props_attributes: Mapping[str, Any],
) -> dict[str, Any]:
    """Container attributes plus the scoped-style class and debug markers."""
    merged = dict(picture_attributes or {})

    class_value = props_attributes.get("class")
    if class_value:
        match = SCOPED_CLASS_RE.search(str(class_value))
        if match:
            token = match.group(0)
            merged["class"] = f"{merged['class']} {token}" if merged.get("class") else token

    for key, value in props_attributes.items():
        if key.startswith(DEBUG_ATTRIBUTE_PREFIX):
            merged[key] = value
    return merged


def assemble_picture(
    renditions: Sequence[Rendition],
    fallback: Rendition,
    hints: SizingHints,
    props_attributes: Mapping[str, Any] | None = None,
    picture_attributes: Mapping[str, Any] | None = None,
    dev: bool = False,
) -> PictureDescriptor:
    source_extra: dict[str, Any] = {}
    if hints.sizes:
        source_extra["sizes"] = hints.sizes

    sources = [
        SourceAttributes(
            srcset=format_source_srcset(rendition, hints),
            type=source_type(rendition.format.value, rendition.src),
            attributes=dict(source_extra),
        )
        for rendition in renditions
    ]

    img_attributes: dict[str, Any] = {}
    if fallback.srcset:
        img_attributes["srcset"] = fallback.srcset_attribute
    if dev:
        img_attributes[DEV_MARKER_ATTRIBUTE] = DEV_MARKER_VALUE
    img_attributes.update(fallback.attributes)

    return PictureDescriptor(
        sources=sources,
        fallback=FallbackImage(src=fallback.src, attributes=img_attributes),
        picture_attributes=merge_picture_attributes(picture_attributes, props_attributes or {}),
    )
