"""Render Markdown to PNG through a headless browser with an optional watermark."""

__version__ = "1.0.0"
