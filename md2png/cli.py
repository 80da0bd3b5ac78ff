"""Command line entry point: ``md2png -i README.md -o out.png --wm-text "CONFIDENTIAL"``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import math
import random
import sys
from pathlib import Path
from typing import IO, Optional, Sequence

from pydantic import ValidationError

from md2png import __version__
from md2png.core.config import get_settings
from md2png.core.errors import ConfigurationError, Md2PngError, ResourceError
from md2png.core.logging import configure_logging
from md2png.models import PageLayout, RenderOptions, WatermarkSpec
from md2png.services.pipeline import RenderPipeline
from md2png.services.watermark_service import WatermarkService

DEFAULT_OUTPUT = "out.png"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md2png",
        description="Render Markdown to PNG via a headless browser with an optional watermark.",
    )
    parser.add_argument("-i", "--input", type=Path, help="Markdown input file; if omitted, read from stdin.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output PNG file (default: input path with .png extension, or out.png).",
    )
    parser.add_argument("--css", type=Path, help="Custom CSS file (replaces the bundled default.css).")
    parser.add_argument(
        "--no-default-css",
        dest="default_css",
        action="store_false",
        help="Do not attach the bundled default.css.",
    )
    parser.add_argument("--width", default="1000", help="Viewport width in px (affects layout).")
    parser.add_argument("--margin", default="48", help="Horizontal page margin inside .main in px.")
    parser.add_argument("--viewport-height", default=None, help="Initial viewport height in px.")

    wm = parser.add_argument_group("watermark")
    wm.add_argument("--wm-text", help="Watermark text (omit to disable).")
    wm.add_argument(
        "--wm-tile",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Tiled watermark (default); --no-wm-tile places a single corner mark.",
    )
    wm.add_argument("--wm-opacity", default="0.25", help="Watermark opacity (0..1).")
    wm.add_argument("--wm-color", default="#334155", help="Watermark color.")
    wm.add_argument("--wm-rotate", default="-30", help="Watermark angle in degrees.")
    wm.add_argument("--wm-gap-x", default="180", help="Tile width in px (horizontal density).")
    wm.add_argument("--wm-gap-y", default="150", help="Tile height in px (vertical density).")
    wm.add_argument("--wm-size", default="24", help="Watermark font size in px.")
    wm.add_argument("--wm-font", default="Arial, sans-serif", help="Watermark font-family.")
    wm.add_argument("--wm-offset", default="20", help="Single-mark distance from the bottom-right corner in px.")
    wm.add_argument("--wm-random-jitter", action="store_true", help="Apply random per-character jitter (dx/dy).")
    wm.add_argument("--wm-seed", type=int, help="Seed for the jitter random source (reproducible output).")

    parser.add_argument("--verbose", action="store_true", help="Print progress logs.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_number(value: object, name: str) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
    return number


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def build_options(args: argparse.Namespace) -> RenderOptions:
    """Validate every numeric and style option up front, before any rendering starts."""
    viewport_height = (
        get_settings().viewport_height_px
        if args.viewport_height is None
        else parse_number(args.viewport_height, "--viewport-height")
    )
    try:
        layout = PageLayout(
            width_px=parse_number(args.width, "--width"),
            margin_px=parse_number(args.margin, "--margin"),
        )
        watermark = WatermarkSpec(
            text=args.wm_text or None,
            opacity=parse_number(args.wm_opacity, "--wm-opacity"),
            color=args.wm_color,
            rotation_degrees=parse_number(args.wm_rotate, "--wm-rotate"),
            font_family=args.wm_font,
            font_size_px=parse_number(args.wm_size, "--wm-size"),
            jitter_enabled=bool(args.wm_random_jitter),
            tile_enabled=bool(args.wm_tile),
            tile_width_px=parse_number(args.wm_gap_x, "--wm-gap-x"),
            tile_height_px=parse_number(args.wm_gap_y, "--wm-gap-y"),
            corner_offset_px=parse_number(args.wm_offset, "--wm-offset"),
        )
        return RenderOptions(
            layout=layout,
            watermark=watermark,
            css_path=args.css,
            use_default_css=bool(args.default_css),
            viewport_height_px=int(viewport_height),
            verbose=bool(args.verbose),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"invalid option: {_describe(exc)}") from exc


def read_source(input_path: Optional[Path], stdin: IO[str]) -> str:
    if input_path is not None:
        try:
            return input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceError(f"cannot read input {input_path}: {exc}") from exc

    if stdin is None or stdin.isatty():
        raise ConfigurationError("No input provided. Use -i <file> or pipe markdown via stdin.")
    return stdin.read()


def resolve_output_path(output: Optional[Path], input_path: Optional[Path]) -> Path:
    if output is not None:
        return output
    if input_path is not None:
        return input_path.with_suffix(".png")
    return Path(DEFAULT_OUTPUT)


def main(argv: Optional[Sequence[str]] = None, pipeline: Optional[RenderPipeline] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging(logging.INFO if args.verbose else logging.WARNING)

    try:
        options = build_options(args)
        if args.input is not None:
            logger.info("read file: %s", args.input)
        else:
            logger.info("read stdin...")
        source = read_source(args.input, sys.stdin)
        output_path = resolve_output_path(args.output, args.input)

        if pipeline is None:
            rng = random.Random(args.wm_seed) if args.wm_seed is not None else None
            pipeline = RenderPipeline(watermark=WatermarkService(rng=rng))
        result = asyncio.run(pipeline.run(source, options, output_path))
    except ConfigurationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    except Md2PngError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.debug("unexpected failure", exc_info=True)
        print(f"[ERROR] {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    print(f"PNG generated: {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
