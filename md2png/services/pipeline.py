from __future__ import annotations

from pathlib import Path
from typing import Optional

from md2png.core.logging import configure_logging
from md2png.models import (
    AssembledDocument,
    ContentStyle,
    PageLayout,
    RenderOptions,
    RenderResult,
    WatermarkSpec,
)
from md2png.services.document_service import DocumentService
from md2png.services.markup_service import MarkupService
from md2png.services.render_service import RenderService
from md2png.services.watermark_service import WatermarkService

logger = configure_logging()


class RenderPipeline:
    """Markdown -> HTML -> watermark layer -> assembled document -> PNG."""

    def __init__(
        self,
        markup: MarkupService | None = None,
        watermark: WatermarkService | None = None,
        documents: DocumentService | None = None,
        renderer: RenderService | None = None,
    ) -> None:
        self.markup = markup or MarkupService()
        self.watermark = watermark or WatermarkService()
        self.documents = documents or DocumentService()
        self._renderer = renderer

    @property
    def renderer(self) -> RenderService:
        if self._renderer is None:
            self._renderer = RenderService()
        return self._renderer

    def build_document(
        self,
        markdown_text: str,
        layout: PageLayout,
        watermark: WatermarkSpec,
        content_style: Optional[ContentStyle] = None,
    ) -> AssembledDocument:
        watermark_css = self.watermark.build_css(watermark)
        body_html = self.markup.to_html(markdown_text)
        return self.documents.assemble(body_html, layout, content_style or ContentStyle(), watermark_css)

    def prepare(self, markdown_text: str, options: RenderOptions) -> AssembledDocument:
        content_style = self.documents.load_content_style(options.css_path, options.use_default_css)
        return self.build_document(markdown_text, options.layout, options.watermark, content_style)

    async def run(self, markdown_text: str, options: RenderOptions, output_path: Path) -> RenderResult:
        document = self.prepare(markdown_text, options)
        logger.info("assembled document: %s chars", len(document.html))
        return await self.renderer.render_to_file(
            document,
            output_path,
            width_px=options.layout.width_px,
            viewport_height_px=options.viewport_height_px,
        )
