
from .document import AssembledDocument, ContentStyle, DocumentStyleLayers, RenderResult
from .render import PageLayout, RenderCommitRequest, RenderOptions, RenderRequest
from .watermark import TileGeometry, WatermarkSpec

__all__ = [
    "AssembledDocument",
    "ContentStyle",
    "DocumentStyleLayers",
    "PageLayout",
    "RenderCommitRequest",
    "RenderOptions",
    "RenderRequest",
    "RenderResult",
    "TileGeometry",
    "WatermarkSpec",
]
