# md2png/main.py
from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from md2png.api import routers
from md2png.core.config import get_settings
from md2png.core.logging import configure_logging

settings = get_settings()
logger = configure_logging()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)

for router in routers:
    app.include_router(router)

# === Rendered downloads ===
downloads_dir: Path = settings.public_dir / "downloads"
downloads_dir.mkdir(parents=True, exist_ok=True)
app.mount("/downloads", StaticFiles(directory=str(downloads_dir)), name="downloads")


@app.get("/")
async def root() -> dict:
    logger.debug("Root endpoint accessed")
    return {"message": "md2png: Markdown to PNG with watermarks"}


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": "md2png API is running"}
