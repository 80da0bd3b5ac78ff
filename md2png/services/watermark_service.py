from __future__ import annotations

import random
from typing import Optional

from md2png.core.logging import configure_logging
from md2png.models import TileGeometry, WatermarkSpec
from md2png.utils.data_uri import svg_data_uri
from md2png.utils.text import escape_html, format_number

logger = configure_logging()

JITTER_DX = (-3, 3)
JITTER_DY = (-2, 2)
WOBBLE_SEED = 7
Z_INDEX = 999999


def build_tile_svg(
    spec: WatermarkSpec,
    geometry: TileGeometry,
    rng: Optional[random.Random] = None,
) -> str:
    """Build one repeatable SVG tile holding the watermark text.

    The rotation pivots on the tile's own center so neighbouring tiles line up
    when the tile is repeated edge to edge.
    """
    text = spec.text or ""
    if not text:
        raise ValueError("watermark text must not be empty")

    cx = format_number(geometry.center_x)
    cy = format_number(geometry.center_y)
    text_open = "<text x='50%' y='50%' dominant-baseline='middle' text-anchor='middle'>"

    if spec.jitter_enabled:
        rng = rng or random.Random()
        spans = []
        for ch in text:
            dx = rng.randint(*JITTER_DX)
            dy = rng.randint(*JITTER_DY)
            spans.append(f"<tspan dx='{dx}' dy='{dy}'>{escape_html(ch)}</tspan>")
        text_node = text_open + "".join(spans) + "</text>"
    else:
        text_node = text_open + escape_html(text) + "</text>"

    return f"""<?xml version="1.0"?>
<svg xmlns='http://www.w3.org/2000/svg' width='{format_number(geometry.width_px)}' height='{format_number(geometry.height_px)}'>
  <defs>
    <filter id='wobble' x='-20%' y='-20%' width='140%' height='140%'>
      <feTurbulence type='fractalNoise' baseFrequency='0.9' numOctaves='1' seed='{WOBBLE_SEED}' result='n'/>
      <feDisplacementMap in='SourceGraphic' in2='n' scale='1.2'/>
    </filter>
  </defs>
  <g filter='url(#wobble)' fill='{escape_html(spec.color)}' opacity='{format_number(spec.opacity)}'
     font-family='{escape_html(spec.font_family)}' font-size='{format_number(spec.font_size_px)}'
     transform='rotate({format_number(spec.rotation_degrees)} {cx} {cy})'>
    {text_node}
  </g>
</svg>"""


def _tiled_css(spec: WatermarkSpec, rng: Optional[random.Random]) -> str:
    geometry = spec.geometry()
    data_uri = svg_data_uri(build_tile_svg(spec, geometry, rng=rng))
    tile_w = format_number(geometry.width_px)
    tile_h = format_number(geometry.height_px)
    # Absolute to body (not fixed to the viewport) so the pattern spans the full document height.
    return f"""body::before{{
  content:"";
  position:absolute;
  top:0;
  left:0;
  width:100%;
  height:100%;
  min-height:100vh;
  pointer-events:none;
  z-index:{Z_INDEX} !important;
  background-image:url('{data_uri}');
  background-repeat:repeat;
  background-size:{tile_w}px {tile_h}px;
  background-position:0 0;
}}
body{{
  position:relative;
  min-height:100vh;
}}"""


def _single_mark_css(spec: WatermarkSpec) -> str:
    offset = format_number(spec.corner_offset_px)
    return f"""body::before{{
  content:"{escape_html(spec.text or "")}";
  position:absolute;
  right:{offset}px;
  bottom:{offset}px;
  font-size:{format_number(spec.font_size_px)}px;
  color:{spec.color};
  opacity:{format_number(spec.opacity)};
  font-family:{spec.font_family};
  transform:rotate({format_number(spec.rotation_degrees)}deg);
  pointer-events:none;
  z-index:{Z_INDEX} !important;
  white-space:nowrap;
}}
body{{
  position:relative;
  min-height:100vh;
}}"""


def build_watermark_css(spec: WatermarkSpec, rng: Optional[random.Random] = None) -> str:
    """Return the watermark stylesheet fragment, or "" when the watermark is disabled."""
    if not spec.enabled:
        return ""
    if spec.tile_enabled:
        return _tiled_css(spec, rng)
    return _single_mark_css(spec)


class WatermarkService:
    """Builds watermark style layers with an injectable random source for jitter."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def build_css(self, spec: WatermarkSpec) -> str:
        if not spec.enabled:
            logger.info("Watermark disabled")
            return ""

        css = build_watermark_css(spec, rng=self.rng)
        logger.info(
            "Watermark applied: %r (%s, jitter=%s)",
            spec.text,
            "tiled" if spec.tile_enabled else "single",
            spec.jitter_enabled,
        )
        return css

    def build_tile(self, spec: WatermarkSpec) -> str:
        return build_tile_svg(spec, spec.geometry(), rng=self.rng)
