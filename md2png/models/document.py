from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

StyleSource = Literal["custom", "default", "none"]


@dataclass(frozen=True)
class ContentStyle:
    css: str = ""
    source: StyleSource = "none"
    diagnostics: tuple[str, ...] = ()


@dataclass(frozen=True)
class DocumentStyleLayers:
    page: str
    content: str
    watermark: str

    def ordered(self) -> tuple[str, str, str]:
        # Watermark last: later layers win on equal specificity.
        return (self.page, self.content, self.watermark)


@dataclass(frozen=True)
class AssembledDocument:
    html: str
    layers: DocumentStyleLayers
    diagnostics: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RenderResult:
    output_path: Path
    width_px: int
    viewport_height_px: int
    size_bytes: int = 0
