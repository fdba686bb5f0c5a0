"""Command-line entry point for dotforge.

This tool loads an image, optionally reduces its colors, optionally draws
black outlines along strong edges, renders it as a grid of large solid
"dots" and saves the result.

All processing occurs on NumPy arrays; Pillow is used only for loading and
saving.

Usage example:
    python -m dotforge.main -i input.png -o output.png --dots 48 --colors 16 --outline normal
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .errors import DotforgeError
from .filters.outline import OutlineStrength
from .filters.quantize import QuantizationLevel
from .grid import TargetGrid, aspect_ratio, grid_for_long_side, resize_grid
from .pipeline import Configuration, run
from .utils.loader import FORMATS, load_image, save_image
from .utils.pixelate import SamplingStrategy
from .utils.resize import DEFAULT_PREVIEW_WIDTH, fit_output_size

logger = logging.getLogger("dotforge")

COLOR_CHOICES = [str(level.value) for level in QuantizationLevel]
OUTLINE_CHOICES = [strength.value for strength in OutlineStrength]
SAMPLING_CHOICES = [strategy.value for strategy in SamplingStrategy]


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="dotforge",
        description="Turn an image into pixel art: reduce colors, outline edges, pixelate.",
    )

    parser.add_argument("-i", "--input", required=True, help="Path to input image file")
    parser.add_argument("-o", "--output", required=True, help="Path to output image file")

    parser.add_argument(
        "--dots",
        type=int,
        default=32,
        help="Number of dots along the longer side of the image (>=1).",
    )
    parser.add_argument(
        "--grid-width",
        type=int,
        default=None,
        help="Dots across. With the aspect lock, the dots down follow the image ratio.",
    )
    parser.add_argument(
        "--grid-height",
        type=int,
        default=None,
        help="Dots down. With the aspect lock, the dots across follow the image ratio.",
    )
    parser.add_argument(
        "--no-lock",
        action="store_true",
        help="Do not keep the grid at the image aspect ratio when one side is given.",
    )
    parser.add_argument(
        "--colors",
        type=str,
        default="unlimited",
        choices=COLOR_CHOICES,
        help="Levels per color channel: 4 | 8 | 16 | 32 | 64 | unlimited",
    )
    parser.add_argument(
        "--outline",
        type=str,
        default="none",
        choices=OUTLINE_CHOICES,
        help="Edge outline strength: none | weak | normal | strong",
    )
    parser.add_argument(
        "--sampling",
        type=str,
        default="center",
        choices=SAMPLING_CHOICES,
        help="Block color: center (point sample, default) | average (block mean)",
    )
    parser.add_argument(
        "--max-width",
        type=int,
        nargs="?",
        const=DEFAULT_PREVIEW_WIDTH,
        default=None,
        help=(
            "Cap the output width, scaling the height to match. Given without a "
            f"value, uses the {DEFAULT_PREVIEW_WIDTH} px preview width. Default: source size."
        ),
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=None,
        help="Quality 1..100 for JPEG/WEBP output.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity.",
    )

    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs.

    Parameters
    ----------
    ns : argparse.Namespace
        Parsed CLI arguments.
    """
    if ns.dots < 1:
        raise ValueError("--dots must be an integer >= 1")
    for name in ("grid_width", "grid_height"):
        value = getattr(ns, name)
        if value is not None and value < 1:
            raise ValueError(f"--{name.replace('_', '-')} must be an integer >= 1")
    if ns.grid_width is not None and ns.grid_height is not None and not ns.no_lock:
        raise ValueError("--grid-width and --grid-height together require --no-lock")
    if ns.max_width is not None and ns.max_width < 1:
        raise ValueError("--max-width must be an integer >= 1")
    if ns.quality is not None and not 1 <= ns.quality <= 100:
        raise ValueError("--quality must be within 1..100")
    if Path(ns.output).suffix.lower().lstrip(".") not in FORMATS:
        raise ValueError(f"Unsupported output format: {ns.output}")
    if not Path(ns.input).exists():
        raise ValueError(f"Input file not found: {ns.input}")


def build_grid(ns: argparse.Namespace, width: int, height: int) -> TargetGrid:
    """Derive the block grid from the CLI options for a width x height image."""
    grid = grid_for_long_side(width, height, ns.dots)
    ratio = aspect_ratio(width, height)
    locked = not ns.no_lock
    if ns.grid_width is not None:
        grid = resize_grid(grid, ratio, width=ns.grid_width, locked=locked)
    if ns.grid_height is not None:
        grid = resize_grid(grid, ratio, height=ns.grid_height, locked=locked)
    return grid


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        Exit status code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    try:
        validate_args(args)
    except ValueError as e:
        logger.error("Argument error: %s", e)
        return 2

    try:
        # 1) Load (Pillow -> RGBA buffer)
        src = load_image(args.input)

        # 2) Grid and output canvas
        grid = build_grid(args, src.width, src.height)
        out_w, out_h = fit_output_size(src.width, src.height, args.max_width)
        config = Configuration(
            grid=grid,
            output_width=out_w,
            output_height=out_h,
            quantization=args.colors,
            outline=args.outline,
            sampling=args.sampling,
        )
        logger.info(
            "Converting %s (%dx%d) to %dx%d dots on a %dx%d canvas",
            args.input,
            src.width,
            src.height,
            grid.blocks_wide,
            grid.blocks_high,
            out_w,
            out_h,
        )

        # 3) Quantize -> outline -> pixelate
        result = run(src, config)

        # 4) Save (RGBA buffer -> Pillow)
        save_image(result, args.output, quality=args.quality)
    except (DotforgeError, OSError) as e:
        logger.error("Conversion failed: %s", e)
        return 1

    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
