"""Validation gate: checks run before any transform work."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from picturekit.engine.errors import MissingAccessibilityText


def validate_props(props: Mapping[str, Any]) -> None:
    # alt="" is a valid decorative image; only absent/None is rejected.
    if props.get("alt") is None:
        raise MissingAccessibilityText()
