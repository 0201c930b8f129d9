"""Tests for the endpoint transform service."""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest

from picturekit.engine.constants import Encoding
from picturekit.engine.errors import (
    InvalidImageHint,
    MissingImageDimension,
    TransformError,
    UnsupportedImageFormat,
)
from picturekit.engine.source import LocalImage
from picturekit.engine.transform import (
    EndpointTransformService,
    Rendition,
    RenditionRequest,
    SrcSetEntry,
    format_density,
    target_dimensions,
)
from tests.conftest import LOCAL_PNG, LOCAL_SVG, REMOTE


def _query(url: str) -> dict[str, str]:
    parsed = urlparse(url)
    return {k: v[0] for k, v in parse_qs(parsed.query).items()}


@pytest.fixture
def service() -> EndpointTransformService:
    return EndpointTransformService(endpoint="/_image")


class TestRenditionRequest:
    def test_empty_hints_are_absent(self):
        req = RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, widths=[], densities=())
        assert req.widths is None
        assert req.densities is None

    def test_lists_become_tuples(self):
        req = RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, widths=[400, 800])
        assert req.widths == (400, 800)


def test_srcset_attribute_joins_entries():
    rendition = Rendition(
        src="/a",
        format=Encoding.WEBP,
        srcset=(SrcSetEntry("/a-400", "400w"), SrcSetEntry("/a-800", "800w")),
    )
    assert rendition.srcset_attribute == "/a-400 400w, /a-800 800w"


@pytest.mark.parametrize("density,expected", [(1, "1x"), (1.0, "1x"), (1.5, "1.5x"), (2, "2x")])
def test_format_density(density, expected):
    assert format_density(density) == expected


class TestTargetDimensions:
    def test_local_defaults_to_intrinsic(self):
        req = RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP)
        assert target_dimensions(req) == (800, 600)

    def test_local_height_from_width(self):
        req = RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, width=400)
        assert target_dimensions(req) == (400, 300)

    def test_local_width_from_height(self):
        req = RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, height=300)
        assert target_dimensions(req) == (400, 300)

    def test_remote_unknown(self):
        req = RenditionRequest(source=REMOTE, format=Encoding.WEBP)
        assert target_dimensions(req) == (None, None)


@pytest.mark.asyncio
async def test_natural_size(service):
    rendition = await service.transform(RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP))
    assert rendition.format is Encoding.WEBP
    assert rendition.src.startswith("/_image?")
    assert _query(rendition.src) == {"href": "/assets/hero.png", "w": "800", "h": "600", "f": "webp"}
    assert rendition.srcset == ()
    assert rendition.attributes == {"width": 800, "height": 600, "loading": "lazy", "decoding": "async"}


@pytest.mark.asyncio
async def test_widths_are_capped_at_intrinsic_width(service):
    rendition = await service.transform(
        RenditionRequest(source=LOCAL_PNG, format=Encoding.AVIF, widths=(400, 1200))
    )
    descriptors = [e.descriptor for e in rendition.srcset]
    assert descriptors == ["400w", "1200w"]
    assert _query(rendition.srcset[0].url)["w"] == "400"
    assert _query(rendition.srcset[0].url)["h"] == "300"
    assert _query(rendition.srcset[1].url)["w"] == "800"


@pytest.mark.asyncio
async def test_densities_scale_target_width(service):
    rendition = await service.transform(
        RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, width=300, densities=(1, 2))
    )
    assert [e.descriptor for e in rendition.srcset] == ["1x", "2x"]
    assert _query(rendition.srcset[0].url)["w"] == "300"
    assert _query(rendition.srcset[1].url)["w"] == "600"
    assert _query(rendition.srcset[1].url)["h"] == "450"


@pytest.mark.asyncio
async def test_widths_win_over_densities(service):
    rendition = await service.transform(
        RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, widths=(200,), densities=(2,))
    )
    assert [e.descriptor for e in rendition.srcset] == ["200w"]


@pytest.mark.asyncio
async def test_remote_densities_need_width(service):
    with pytest.raises(MissingImageDimension) as exc_info:
        await service.transform(RenditionRequest(source=REMOTE, format=Encoding.WEBP, densities=(1, 2)))
    assert isinstance(exc_info.value, TransformError)


@pytest.mark.asyncio
async def test_remote_with_width(service):
    rendition = await service.transform(
        RenditionRequest(source=REMOTE, format=Encoding.WEBP, width=300, densities=(1.5,))
    )
    query = _query(rendition.srcset[0].url)
    assert query["href"] == REMOTE.url
    assert query["w"] == "450"
    assert "h" not in query
    assert rendition.attributes["width"] == 300
    assert "height" not in rendition.attributes


@pytest.mark.asyncio
async def test_svg_source_stays_svg(service):
    rendition = await service.transform(RenditionRequest(source=LOCAL_SVG, format=Encoding.WEBP))
    assert rendition.format is Encoding.SVG
    assert _query(rendition.src)["f"] == "svg"


@pytest.mark.asyncio
async def test_unsupported_format(service):
    with pytest.raises(UnsupportedImageFormat) as exc_info:
        await service.transform(RenditionRequest(source=LOCAL_PNG, format="bmp"))
    assert exc_info.value.format == "bmp"
    assert "webp" in exc_info.value.hint


@pytest.mark.asyncio
async def test_quality_defaults_from_service():
    service = EndpointTransformService(endpoint="/img", default_quality=70)
    rendition = await service.transform(RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP))
    assert rendition.src.startswith("/img?")
    assert _query(rendition.src)["q"] == "70"

    rendition = await service.transform(RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, quality=90))
    assert _query(rendition.src)["q"] == "90"


@pytest.mark.asyncio
async def test_options_pass_through_to_attributes(service):
    rendition = await service.transform(
        RenditionRequest(
            source=LOCAL_PNG,
            format=Encoding.WEBP,
            options={"alt": "Hero", "loading": "eager", "width": 1},
        )
    )
    assert rendition.attributes["alt"] == "Hero"
    assert rendition.attributes["loading"] == "eager"
    assert rendition.attributes["decoding"] == "async"
    # Computed size replaces whatever was passed through.
    assert rendition.attributes["width"] == 800


@pytest.mark.asyncio
@pytest.mark.parametrize("hints", [{"widths": (0, 400)}, {"widths": (-400,)}, {"densities": (0,)}, {"densities": (-1.5,)}])
async def test_non_positive_hints_rejected(service, hints):
    with pytest.raises(InvalidImageHint) as exc_info:
        await service.transform(RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, **hints))
    assert isinstance(exc_info.value, TransformError)


UNSIZED_SVG = LocalImage(src="/assets/bare.svg", width=0, height=0, format=Encoding.SVG)


def test_unsized_local_has_no_target_dimensions():
    assert not UNSIZED_SVG.has_intrinsic_size
    req = RenditionRequest(source=UNSIZED_SVG, format=Encoding.SVG)
    assert target_dimensions(req) == (None, None)


@pytest.mark.asyncio
async def test_unsized_local_widths_are_not_capped(service):
    rendition = await service.transform(
        RenditionRequest(source=UNSIZED_SVG, format=Encoding.SVG, widths=(400, 800))
    )
    assert "w" not in _query(rendition.src)
    assert "h" not in _query(rendition.src)
    assert [_query(e.url)["w"] for e in rendition.srcset] == ["400", "800"]
    assert all("h" not in _query(e.url) for e in rendition.srcset)
    assert "width" not in rendition.attributes


@pytest.mark.asyncio
async def test_unsized_local_densities_need_width(service):
    with pytest.raises(MissingImageDimension):
        await service.transform(RenditionRequest(source=UNSIZED_SVG, format=Encoding.SVG, densities=(1, 2)))


@pytest.mark.asyncio
async def test_rendition_attributes_are_read_only(service):
    options = {"alt": "Hero"}
    rendition = await service.transform(
        RenditionRequest(source=LOCAL_PNG, format=Encoding.WEBP, options=options)
    )
    with pytest.raises(TypeError):
        rendition.attributes["alt"] = "changed"
    options["alt"] = "changed"
    assert rendition.attributes["alt"] == "Hero"
