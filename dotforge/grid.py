"""Block-grid dimensions and the aspect-ratio lock."""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidConfiguration


def _round_positive(x: float) -> int:
    """Round half away from zero, never returning less than 1."""
    return max(1, int(math.floor(x + 0.5)))


@dataclass(frozen=True)
class TargetGrid:
    """Number of pixel-art dots across and down."""

    blocks_wide: int
    blocks_high: int

    def __post_init__(self) -> None:
        for name in ("blocks_wide", "blocks_high"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")


def aspect_ratio(width: int, height: int) -> float:
    if width < 1 or height < 1:
        raise InvalidConfiguration(f"image size must be positive, got {width}x{height}")
    return width / height


def resize_grid(
    grid: TargetGrid,
    ratio: float,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
    locked: bool = True,
) -> TargetGrid:
    """Apply an edit of one grid dimension.

    Exactly one of ``width``/``height`` is the dimension the user just
    changed. With ``locked`` the other one follows the source aspect ratio:
    ``height = round(width / ratio)`` or ``width = round(height * ratio)``.
    Without it only the edited dimension changes.

    Examples
    --------
    >>> g = resize_grid(TargetGrid(1, 1), 2.0, width=100)
    >>> g
    TargetGrid(blocks_wide=100, blocks_high=50)
    >>> resize_grid(g, 2.0, height=40)
    TargetGrid(blocks_wide=80, blocks_high=40)
    """
    if (width is None) == (height is None):
        raise InvalidConfiguration("exactly one of width or height must be edited")
    if ratio <= 0:
        raise InvalidConfiguration(f"aspect ratio must be positive, got {ratio}")

    if width is not None:
        if not locked:
            return TargetGrid(width, grid.blocks_high)
        return TargetGrid(width, _round_positive(width / ratio))

    if not locked:
        return TargetGrid(grid.blocks_wide, height)
    return TargetGrid(_round_positive(height * ratio), height)


def grid_for_long_side(width: int, height: int, dots: int) -> TargetGrid:
    """Grid with ``dots`` blocks along the longer side of a width x height image.

    Landscape and square images get ``dots`` columns, portrait images get
    ``dots`` rows; the other side follows the aspect ratio.
    """
    if dots < 1:
        raise InvalidConfiguration(f"dot count must be positive, got {dots}")
    ratio = aspect_ratio(width, height)
    if height > width:
        return TargetGrid(_round_positive(dots * ratio), dots)
    return TargetGrid(dots, _round_positive(dots / ratio))


__all__ = ["TargetGrid", "aspect_ratio", "resize_grid", "grid_for_long_side"]
