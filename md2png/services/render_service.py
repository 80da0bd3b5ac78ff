from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from md2png.core.config import get_settings
from md2png.core.errors import RenderingError
from md2png.core.logging import configure_logging
from md2png.models import AssembledDocument, RenderResult
from md2png.storage.local import LocalStorage

logger = configure_logging()

# Resolves once web fonts are loaded and two frames have been painted.
PAINT_READY_SCRIPT = """() => document.fonts.ready.then(
  () => new Promise(resolve => requestAnimationFrame(() => requestAnimationFrame(() => resolve(true))))
)"""


class RenderService:
    """Headless Chromium bridge: loads an assembled document and captures a full-page PNG."""

    def __init__(
        self,
        storage: LocalStorage | None = None,
        settle_ms: Optional[int] = None,
        ready_timeout_ms: Optional[int] = None,
        browser_args: Optional[Sequence[str]] = None,
    ) -> None:
        settings = get_settings()
        self.storage = storage or LocalStorage()
        self.settle_ms = settings.settle_ms if settle_ms is None else settle_ms
        self.ready_timeout_ms = settings.ready_timeout_ms if ready_timeout_ms is None else ready_timeout_ms
        self.browser_args = list(settings.browser_args if browser_args is None else browser_args)

    # ------------------------------------------------------------------
    async def render_to_file(
        self,
        document: AssembledDocument,
        output_path: Path,
        width_px: float,
        viewport_height_px: int,
    ) -> RenderResult:
        """Render into a temporary file next to ``output_path`` and move it into place on success."""
        output_path = Path(output_path)
        width = int(round(width_px))

        with self.storage.temporary_path(suffix=".png", directory=output_path.parent) as temp_path:
            await self._capture(document.html, temp_path, width, viewport_height_px)
            self.storage.promote(temp_path, output_path)

        size_bytes = output_path.stat().st_size
        logger.info("PNG written: %s (%s bytes)", output_path, size_bytes)
        return RenderResult(
            output_path=output_path,
            width_px=width,
            viewport_height_px=viewport_height_px,
            size_bytes=size_bytes,
        )

    async def render_bytes(
        self,
        document: AssembledDocument,
        width_px: float,
        viewport_height_px: int,
    ) -> bytes:
        with self.storage.temporary_path(suffix=".png") as temp_path:
            await self._capture(document.html, temp_path, int(round(width_px)), viewport_height_px)
            return temp_path.read_bytes()

    # ------------------------------------------------------------------
    async def _capture(self, html: str, target: Path, width: int, height: int) -> None:
        logger.info("launching headless chromium (viewport %sx%s)", width, height)
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(headless=True, args=self.browser_args)
                try:
                    page = await browser.new_page(viewport={"width": width, "height": height})
                    await page.set_content(html, wait_until="load")
                    await self._wait_until_painted(page)
                    await page.screenshot(path=str(target), full_page=True, omit_background=False)
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            raise RenderingError(f"browser rendering failed: {exc}") from exc

    async def _wait_until_painted(self, page: Page) -> None:
        try:
            await asyncio.wait_for(page.evaluate(PAINT_READY_SCRIPT), timeout=self.ready_timeout_ms / 1000)
        except (asyncio.TimeoutError, PlaywrightError) as exc:
            logger.warning(
                "paint readiness not confirmed (%s); falling back to a fixed %s ms wait",
                type(exc).__name__,
                self.settle_ms,
            )
            await page.wait_for_timeout(self.settle_ms)
