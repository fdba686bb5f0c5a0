"""Output canvas sizing.

The pipeline renders onto a canvas whose size is independent of the block
grid. By default that canvas matches the source image; callers that show a
preview can cap its width while keeping the aspect ratio.
"""
from __future__ import annotations

from typing import Optional

from ..errors import InvalidConfiguration

DEFAULT_PREVIEW_WIDTH = 350


def fit_output_size(width: int, height: int, max_width: Optional[int] = None) -> tuple[int, int]:
    """Return the (width, height) of the output canvas for a source image.

    Parameters
    ----------
    width, height : int
        Source image size (>=1).
    max_width : int | None
        Widest canvas allowed. Wider images are scaled down proportionally;
        narrower ones are never enlarged. ``None`` keeps the source size.

    Returns
    -------
    tuple[int, int]
        Canvas width and height, each >=1. Scaled sizes are truncated.
    """
    if width < 1 or height < 1:
        raise InvalidConfiguration(f"image size must be positive, got {width}x{height}")
    if max_width is None or width <= max_width:
        return width, height
    if max_width < 1:
        raise InvalidConfiguration(f"max_width must be >= 1, got {max_width}")

    scale = max_width / width
    return max_width, max(1, int(height * scale))


__all__ = ["fit_output_size", "DEFAULT_PREVIEW_WIDTH"]
