from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .watermark import WatermarkSpec

MIN_CONTENT_WIDTH_PX = 320


class PageLayout(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    width_px: float = Field(1000, gt=0, description="Viewport width (affects layout).")
    margin_px: float = Field(48, ge=0, description="Horizontal page margin inside .main.")

    @property
    def content_width_px(self) -> float:
        return max(MIN_CONTENT_WIDTH_PX, self.width_px - self.margin_px * 2)


class RenderOptions(BaseModel):
    """Everything a single run needs, resolved once and passed down explicitly."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    layout: PageLayout = Field(default_factory=PageLayout)
    watermark: WatermarkSpec = Field(default_factory=WatermarkSpec)
    css_path: Optional[Path] = None
    use_default_css: bool = True
    viewport_height_px: int = Field(800, gt=0)
    verbose: bool = False


class RenderRequest(BaseModel):
    markdown: str = Field(..., description="Markdown source text.")
    layout: PageLayout = Field(default_factory=PageLayout)
    watermark: WatermarkSpec = Field(default_factory=WatermarkSpec)
    css: Optional[str] = Field(None, description="Custom stylesheet text (replaces the default one).")
    use_default_css: bool = True


class RenderCommitRequest(RenderRequest):
    output_filename: str | None = Field(default=None, description="Output file name (optional).")
