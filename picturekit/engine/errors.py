"""Error taxonomy for picture resolution.

Failures from source handles are not wrapped: whatever an awaitable ``src``
raises reaches the caller as-is.
"""

from __future__ import annotations


class PictureError(Exception):
    """Base class for errors raised by picturekit itself."""

    def __init__(self, message: str, hint: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} {self.hint}"
        return self.message


class MissingAccessibilityText(PictureError):
    def __init__(self) -> None:
        super().__init__(
            "Image missing required \"alt\" property.",
            "Pass alt=\"\" for purely decorative images.",
        )


class TransformError(PictureError):
    """Raised by a transform service for a single rendition."""


class UnsupportedImageFormat(TransformError):
    def __init__(self, fmt: str, supported: tuple[str, ...]) -> None:
        super().__init__(
            f"Received unsupported format `{fmt}`.",
            f"Supported formats are: {', '.join(supported)}.",
        )
        self.format = fmt


class MissingImageDimension(TransformError):
    def __init__(self, src: str) -> None:
        super().__init__(
            f"Missing width for image {src}.",
            "Density descriptors need a target width; pass `width` explicitly.",
        )
        self.src = src


class InvalidImageHint(TransformError):
    def __init__(self, name: str, value: object) -> None:
        super().__init__(
            f"Invalid {name} value {value!r}.",
            f"{name.capitalize()} must be positive numbers.",
        )
        self.name = name
        self.value = value
