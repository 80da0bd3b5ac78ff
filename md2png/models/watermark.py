from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from md2png.core.errors import ConfigurationError

# Characters that would break out of an inline CSS declaration or SVG attribute.
UNSAFE_STYLE_CHARS = frozenset("<>{};")


@dataclass(frozen=True)
class TileGeometry:
    width_px: float
    height_px: float

    def __post_init__(self) -> None:
        for name, value in (("tile width", self.width_px), ("tile height", self.height_px)):
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")

    @property
    def center_x(self) -> float:
        return self.width_px / 2

    @property
    def center_y(self) -> float:
        return self.height_px / 2


class WatermarkSpec(BaseModel):
    """Immutable watermark settings for one run. Empty or missing text disables the watermark."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    text: Optional[str] = Field(None, description="Watermark text (omit to disable).")
    opacity: float = Field(0.25, ge=0, le=1, description="Opacity between 0 and 1.")
    color: str = Field("#334155", min_length=1, description="Any CSS color.")
    rotation_degrees: float = Field(-30, description="Rotation angle in degrees.")
    font_family: str = Field("Arial, sans-serif", min_length=1)
    font_size_px: float = Field(24, gt=0)
    jitter_enabled: bool = Field(False, description="Scatter each character by a few pixels.")
    tile_enabled: bool = Field(True, description="Tiled pattern instead of a single corner mark.")
    tile_width_px: float = Field(180, gt=0, description="Tile width (horizontal density).")
    tile_height_px: float = Field(150, gt=0, description="Tile height (vertical density).")
    corner_offset_px: float = Field(20, ge=0, description="Single-mark distance from the corner.")

    @field_validator("color", "font_family")
    @classmethod
    def _reject_unsafe_chars(cls, value: str) -> str:
        bad = sorted(set(value) & UNSAFE_STYLE_CHARS)
        if bad:
            raise ValueError(f"must not contain {' '.join(bad)}")
        return value

    @property
    def enabled(self) -> bool:
        return bool(self.text)

    def geometry(self) -> TileGeometry:
        return TileGeometry(self.tile_width_px, self.tile_height_px)
