import base64

SVG_MIME = "image/svg+xml"


def svg_data_uri(svg: str) -> str:
    """Inline an SVG document as a base64 data URI (UTF-8 bytes)."""
    return f"data:{SVG_MIME};base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def png_data_uri(data: bytes) -> str:
    encoded = base64.b64encode(data).decode("utf-8")
    return f"data:image/png;base64,{encoded}"
