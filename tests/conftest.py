"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import pytest

from picturekit.engine.constants import Encoding
from picturekit.engine.source import LocalImage, RemoteImage
from picturekit.engine.transform import Rendition, RenditionRequest, SrcSetEntry


LOCAL_PNG = LocalImage(src="/assets/hero.png", width=800, height=600, format=Encoding.PNG)
LOCAL_GIF = LocalImage(src="/assets/spinner.gif", width=64, height=64, format=Encoding.GIF)
LOCAL_SVG = LocalImage(src="/assets/logo.svg", width=120, height=40, format=Encoding.SVG)
LOCAL_JPEG = LocalImage(src="/assets/photo.jpeg", width=1600, height=900, format=Encoding.JPEG)
REMOTE = RemoteImage(url="https://cdn.example.com/photo.jpg")

SVG_WITH_SIZE = '''<svg xmlns="http://www.w3.org/2000/svg" width="120" height="40" viewBox="0 0 240 80">
  <rect x="0" y="0" width="240" height="80" fill="#4ECDC4"/>
</svg>'''

SVG_BARE = '<svg xmlns="http://www.w3.org/2000/svg"/>'

SVG_VIEWBOX_ONLY = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none">
  <circle cx="12" cy="12" r="10"/>
</svg>'''


class FakeTransformService:
    """Records every request; renders deterministic URLs.

    ``delays`` holds per-format sleep times so tests can force completion
    order. Formats in ``failing`` raise ``error``.
    """

    def __init__(
        self,
        delays: dict[Encoding, float] | None = None,
        failing: set[Encoding] | None = None,
        error: Exception | None = None,
        extra_entries: bool = True,
    ) -> None:
        self.delays = delays or {}
        self.failing = failing or set()
        self.error = error or RuntimeError("transform failed")
        self.extra_entries = extra_entries
        self.calls: list[RenditionRequest] = []
        self.completed: list[Encoding] = []
        self.cancelled: list[Encoding] = []
        # len(calls) observed as each call finishes.
        self.calls_seen_at_completion: list[int] = []

    async def transform(self, request: RenditionRequest) -> Rendition:
        self.calls.append(request)
        fmt = request.format
        try:
            await asyncio.sleep(self.delays.get(fmt, 0))
        except asyncio.CancelledError:
            self.cancelled.append(fmt)
            raise
        if fmt in self.failing:
            raise self.error

        base = f"/img/{fmt.value}"
        entries: list[SrcSetEntry] = []
        if self.extra_entries:
            if request.widths:
                entries = [SrcSetEntry(f"{base}-{w}", f"{w}w") for w in request.widths]
            elif request.densities:
                entries = [SrcSetEntry(f"{base}@{d:g}x", f"{d:g}x") for d in request.densities]
        self.completed.append(fmt)
        self.calls_seen_at_completion.append(len(self.calls))
        return Rendition(
            src=base,
            format=fmt,
            srcset=tuple(entries),
            attributes={"width": 800, "height": 600, **request.options},
        )

    @property
    def formats(self) -> list[Encoding]:
        return [req.format for req in self.calls]


@pytest.fixture
def fake_service() -> FakeTransformService:
    return FakeTransformService()


@pytest.fixture
def png_props() -> dict:
    return {"src": LOCAL_PNG, "alt": "Hero", "formats": ["webp"]}
