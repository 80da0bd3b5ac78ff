from pathlib import Path

import fitz  # PyMuPDF

from md2png.utils.data_uri import png_data_uri


def render_image_preview(image_path: Path, max_width: int = 320) -> str:
    """
    Build a downscaled PNG thumbnail of a rendered image and return it as a data URI.

    Args:
        image_path: path to the rendered PNG.
        max_width: thumbnail width cap in pixels; smaller images keep their size.
    """
    if max_width < 1:
        raise ValueError("max_width must be >= 1")

    with fitz.open(image_path) as document:
        page = document.load_page(0)
        zoom = min(1.0, max_width / page.rect.width) if page.rect.width else 1.0
        pixmap = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        image_bytes = pixmap.tobytes("png")

    return png_data_uri(image_bytes)
