import base64
import random
import re

import pytest
from pydantic import ValidationError

from md2png.models import WatermarkSpec
from md2png.services.watermark_service import WatermarkService, build_watermark_css

DATA_URI = re.compile(r"url\('data:image/svg\+xml;base64,([A-Za-z0-9+/=]+)'\)")


def _decoded_tile(css):
    payloads = DATA_URI.findall(css)
    assert len(payloads) == 1
    return base64.b64decode(payloads[0]).decode("utf-8")


@pytest.mark.parametrize("text", [None, ""])
def test_disabled_watermark_yields_empty_fragment(text):
    spec = WatermarkSpec(text=text)
    assert not spec.enabled
    assert build_watermark_css(spec) == ""
    assert WatermarkService().build_css(spec) == ""


def test_tiled_mode_is_the_default(confidential):
    assert confidential.tile_enabled is True
    css = build_watermark_css(confidential)
    assert "background-image:url('data:image/svg+xml;base64," in css


def test_tiled_mode_covers_the_whole_document(confidential):
    css = build_watermark_css(confidential)

    assert "body::before{" in css
    assert "position:absolute;" in css
    assert "width:100%;" in css
    assert "height:100%;" in css
    assert "min-height:100vh;" in css
    assert re.search(r"body\{\s*position:relative;\s*min-height:100vh;\s*\}", css)


def test_tiled_mode_pins_tile_size_and_origin(confidential):
    css = build_watermark_css(confidential)

    assert "background-size:180px 150px;" in css
    assert "background-position:0 0;" in css
    assert "background-repeat:repeat;" in css


def test_tiled_mode_stays_on_top_and_non_interactive(confidential):
    css = build_watermark_css(confidential)
    assert "z-index:999999 !important;" in css
    assert "pointer-events:none;" in css


def test_tiled_payload_holds_text_and_centered_rotation(confidential):
    tile = _decoded_tile(build_watermark_css(confidential))
    assert "CONFIDENTIAL" in tile
    assert "rotate(-30 90 75)" in tile


def test_custom_gap_changes_tile_and_background_size():
    spec = WatermarkSpec(text="DRAFT", tile_width_px=260, tile_height_px=200, rotation_degrees=-15)
    css = build_watermark_css(spec)
    assert "background-size:260px 200px;" in css
    assert "rotate(-15 130 100)" in _decoded_tile(css)


def test_single_mark_mode_uses_escaped_text_content():
    spec = WatermarkSpec(text='Tom & "Jerry"', tile_enabled=False)
    css = build_watermark_css(spec)

    assert 'content:"Tom &amp; &quot;Jerry&quot;";' in css
    assert "right:20px;" in css
    assert "bottom:20px;" in css
    assert "transform:rotate(-30deg);" in css
    assert "opacity:0.25;" in css
    assert "font-size:24px;" in css
    assert "pointer-events:none;" in css
    assert "z-index:999999 !important;" in css
    assert "position:relative;" in css
    assert "data:image" not in css


def test_single_mark_offset_is_configurable():
    spec = WatermarkSpec(text="X", tile_enabled=False, corner_offset_px=8)
    css = build_watermark_css(spec)
    assert "right:8px;" in css
    assert "bottom:8px;" in css


def test_service_uses_injected_rng_for_jitter():
    spec = WatermarkSpec(text="CONFIDENTIAL", jitter_enabled=True)
    first = WatermarkService(rng=random.Random(3)).build_css(spec)
    second = WatermarkService(rng=random.Random(3)).build_css(spec)
    assert first == second
    assert _decoded_tile(first).count("<tspan") == len("CONFIDENTIAL")


@pytest.mark.parametrize(
    "field",
    ["opacity", "rotation_degrees", "font_size_px", "tile_width_px", "tile_height_px"],
)
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_are_rejected(field, value):
    with pytest.raises(ValidationError):
        WatermarkSpec(text="X", **{field: value})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"opacity": 1.5},
        {"opacity": -0.1},
        {"font_size_px": 0},
        {"tile_width_px": 0},
        {"tile_height_px": -10},
        {"color": "red;}body{display:none"},
        {"font_family": "</style><script>"},
    ],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        WatermarkSpec(text="X", **kwargs)


def test_spec_is_immutable(confidential):
    with pytest.raises(ValidationError):
        confidential.text = "OTHER"
