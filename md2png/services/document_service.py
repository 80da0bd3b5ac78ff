from __future__ import annotations

from pathlib import Path
from typing import Optional

from md2png.core.config import get_settings
from md2png.core.errors import ResourceError
from md2png.core.logging import configure_logging
from md2png.models import AssembledDocument, ContentStyle, DocumentStyleLayers, PageLayout
from md2png.utils.text import format_number

logger = configure_logging()

BODY_FONT_STACK = (
    '-apple-system,BlinkMacSystemFont,"Segoe UI",Roboto,"PingFang SC","Microsoft YaHei",Arial,sans-serif'
)


class DocumentService:
    """Composes the page, content and watermark style layers with the converted body."""

    def __init__(self, default_css_path: Optional[Path] = None) -> None:
        self.default_css_path = Path(default_css_path or get_settings().default_css_path)

    # ------------------------------------------------------------------
    def load_content_style(
        self,
        css_path: Optional[Path] = None,
        use_default_css: bool = True,
    ) -> ContentStyle:
        """Resolve the content layer: custom file > bundled default > nothing.

        A missing custom stylesheet is fatal. A missing default stylesheet only
        leaves the content layer empty and reports it through ``diagnostics``.
        """
        if css_path is not None:
            logger.info("attach custom css: %s", css_path)
            try:
                return ContentStyle(css=Path(css_path).read_text(encoding="utf-8"), source="custom")
            except (OSError, UnicodeDecodeError) as exc:
                raise ResourceError(f"cannot read stylesheet {css_path}: {exc}") from exc

        if not use_default_css:
            logger.info("default css disabled")
            return ContentStyle()

        if not self.default_css_path.is_file():
            message = f"default stylesheet not found: {self.default_css_path}"
            logger.warning("%s, using minimal styles only", message)
            return ContentStyle(diagnostics=(message,))

        try:
            css = self.default_css_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            message = f"default stylesheet unreadable: {exc}"
            logger.warning("%s, using minimal styles only", message)
            return ContentStyle(diagnostics=(message,))

        logger.info("attach default css: %s", self.default_css_path)
        return ContentStyle(css=css, source="default")

    @staticmethod
    def page_css(layout: PageLayout) -> str:
        return f"""
:root{{ --bg:#ffffff; --fg:#111; }}
html,body{{ margin:0; padding:0; }}
body{{ color:var(--fg); font-family:{BODY_FONT_STACK}; line-height:1.65; }}
.main{{ width:{format_number(layout.content_width_px)}px; margin:{format_number(layout.margin_px)}px auto; }}
"""

    def assemble(
        self,
        body_html: str,
        layout: PageLayout,
        content_style: ContentStyle,
        watermark_css: str,
    ) -> AssembledDocument:
        layers = DocumentStyleLayers(
            page=self.page_css(layout),
            content=content_style.css,
            watermark=watermark_css,
        )
        styles = "\n".join(f"<style>{layer}</style>" for layer in layers.ordered())
        html = f"""<!doctype html>
<html><head><meta charset="utf-8"/>
{styles}
</head>
<body><main class="main">{body_html}</main></body></html>"""
        return AssembledDocument(html=html, layers=layers, diagnostics=content_style.diagnostics)
