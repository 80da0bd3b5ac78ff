from pathlib import Path

from fastapi import APIRouter, HTTPException

from md2png.core.config import get_settings
from md2png.core.errors import ConfigurationError, RenderingError, ResourceError
from md2png.core.logging import configure_logging
from md2png.models import ContentStyle, RenderCommitRequest, RenderRequest
from md2png.services.pipeline import RenderPipeline
from md2png.services.render_service import RenderService
from md2png.storage.local import LocalStorage
from md2png.utils.image_preview import render_image_preview

router = APIRouter(prefix="/render", tags=["Render"])

logger = configure_logging()
storage = LocalStorage()
pipeline = RenderPipeline(renderer=RenderService(storage))


def _build(payload: RenderRequest):
    if payload.css is not None:
        content_style = ContentStyle(css=payload.css, source="custom")
    else:
        content_style = pipeline.documents.load_content_style(None, payload.use_default_css)
    try:
        return pipeline.build_document(payload.markdown, payload.layout, payload.watermark, content_style)
    except (ConfigurationError, ResourceError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _output_name(payload: RenderCommitRequest) -> str:
    name = Path(payload.output_filename or "render.png").name
    return name if name.lower().endswith(".png") else f"{Path(name).stem}.png"


@router.post("/preview", summary="Assemble the watermarked HTML without rendering it")
async def preview_document(payload: RenderRequest) -> dict:
    document = _build(payload)
    return {
        "status": "ok",
        "html": document.html,
        "diagnostics": list(document.diagnostics),
    }


@router.post("/commit", summary="Render the document to PNG and return a download card")
async def commit_render(payload: RenderCommitRequest) -> dict:
    document = _build(payload)
    try:
        png = await pipeline.renderer.render_bytes(
            document,
            width_px=payload.layout.width_px,
            viewport_height_px=get_settings().viewport_height_px,
        )
    except RenderingError as exc:
        logger.error("render failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    result_path = storage.save_bytes(png, suffix=".png")
    try:
        public_path = storage.register_public_download(result_path, _output_name(payload))
    finally:
        storage.cleanup([result_path])

    logger.info("rendered %s (%s bytes)", public_path.name, len(png))

    return {
        "status": "ok",
        "message": "PNG generated.",
        "result": {
            "filename": public_path.name,
            "size_bytes": len(png),
            "download_url": f"/downloads/{public_path.name}",
            "preview": render_image_preview(public_path),
            "diagnostics": list(document.diagnostics),
        },
    }
