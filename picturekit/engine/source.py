"""Source resolver. Normalizes a ``src`` input into an ImageSource.

Accepted inputs:
    LocalImage / mapping with src, width, height, format  → LocalImage
    str / RemoteImage                                     → RemoteImage
    awaitable of any of the above                         → awaited, then classified
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from picturekit.engine.constants import Encoding

logger = logging.getLogger(__name__)

_LOCAL_KEYS = ("src", "width", "height", "format")


@dataclass(frozen=True)
class LocalImage:
    """An imported local asset with known intrinsic metadata."""

    src: str
    width: int
    height: int
    format: Encoding

    @property
    def has_intrinsic_size(self) -> bool:
        # SVGs without width/height/viewBox load as 0x0.
        return self.width > 0 and self.height > 0

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height else 1.0


@dataclass(frozen=True)
class RemoteImage:
    url: str


ImageSource = Union[LocalImage, RemoteImage]


def is_local_asset(value: Any) -> bool:
    """True for values carrying intrinsic width/height/format metadata."""
    if isinstance(value, LocalImage):
        return True
    if isinstance(value, Mapping):
        return all(value.get(key) is not None for key in _LOCAL_KEYS)
    return False


def _local_from_mapping(value: Mapping[str, Any]) -> LocalImage:
    return LocalImage(
        src=str(value["src"]),
        width=int(value["width"]),
        height=int(value["height"]),
        format=Encoding(str(value["format"]).lower()),
    )


async def resolve_source(src_input: Any) -> ImageSource:
    """Resolve *src_input* into a LocalImage or RemoteImage.

    Errors raised while awaiting an awaitable source propagate unchanged.
    """
    value = src_input
    if inspect.isawaitable(value):
        value = await value

    if isinstance(value, (LocalImage, RemoteImage)):
        return value
    if is_local_asset(value):
        return _local_from_mapping(value)
    if isinstance(value, Mapping) and "src" in value:
        # No intrinsic metadata, only the URL is usable.
        return RemoteImage(url=str(value["src"]))

    logger.debug("Treating source %r as remote", value)
    return RemoteImage(url=str(value))
