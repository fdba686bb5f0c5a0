"""Block pixelation operating on NumPy arrays.

Pixelation first reduces the source to one color per grid block, then
stretches those block colors back over an output canvas of arbitrary size.
Block edges are placed at ``floor(i * length / blocks)`` with the final edge
snapped to the full length, so blocks tile the image with no gaps.
"""
from __future__ import annotations

import numbers
from enum import Enum
from typing import Union

import numpy as np

from ..buffer import PixelBuffer
from ..errors import InvalidConfiguration
from ..grid import TargetGrid

Array = np.ndarray


class SamplingStrategy(Enum):
    """How a block's representative color is chosen."""

    CENTER = "center"  # point-sample the pixel under the block center
    AVERAGE = "average"  # mean of every source pixel in the block

    @classmethod
    def parse(cls, value: Union["SamplingStrategy", str, None]) -> "SamplingStrategy":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.CENTER
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidConfiguration(f"Unknown sampling strategy: {value!r}")


def _check_size(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")


def block_bounds(length: int, blocks: int) -> Array:
    """Return the ``blocks + 1`` edge positions splitting ``length`` pixels.

    Block ``i`` covers ``[bounds[i], bounds[i + 1])``. When there are more
    blocks than pixels some blocks are empty.
    """
    step = length / blocks
    bounds = np.floor(np.arange(blocks + 1) * step).astype(np.int64)
    bounds[-1] = length
    return bounds


def _block_of_pixel(length: int, blocks: int) -> Array:
    """Index of the block that owns each of ``length`` output pixels."""
    bounds = block_bounds(length, blocks)
    idx = np.searchsorted(bounds, np.arange(length), side="right") - 1
    return np.clip(idx, 0, blocks - 1)


def _center_samples(length: int, blocks: int) -> Array:
    step = length / blocks
    pos = np.floor((np.arange(blocks) + 0.5) * step).astype(np.int64)
    return np.clip(pos, 0, length - 1)


def _sample_center(arr: Array, grid: TargetGrid) -> Array:
    H, W, _ = arr.shape
    yi = _center_samples(H, grid.blocks_high)
    xi = _center_samples(W, grid.blocks_wide)
    return arr[yi[:, None], xi[None, :], :]


def _sample_average(arr: Array, grid: TargetGrid) -> Array:
    H, W, _ = arr.shape
    ys = block_bounds(H, grid.blocks_high)
    xs = block_bounds(W, grid.blocks_wide)
    # Empty blocks (more blocks than pixels) fall back to their start pixel,
    # which is what reduceat yields for non-increasing index pairs.
    counts_y = np.maximum(np.diff(ys), 1)
    counts_x = np.maximum(np.diff(xs), 1)

    sums = np.add.reduceat(arr.astype(np.float64), ys[:-1], axis=0)
    sums = np.add.reduceat(sums, xs[:-1], axis=1)
    means = sums / (counts_y[:, None, None] * counts_x[None, :, None])
    return np.clip(np.floor(means + 0.5), 0, 255).astype(np.uint8)


def downscale(
    source: PixelBuffer,
    grid: TargetGrid,
    sampling: Union[SamplingStrategy, str] = SamplingStrategy.CENTER,
) -> PixelBuffer:
    """Reduce ``source`` to one pixel per grid block.

    Parameters
    ----------
    source : PixelBuffer
        Image to sample.
    grid : TargetGrid
        Number of blocks across and down; the result has this size.
    sampling : SamplingStrategy | str
        ``CENTER`` picks the source pixel at
        ``(floor((bx + 0.5) * W / blocks_wide), floor((by + 0.5) * H / blocks_high))``.
        ``AVERAGE`` takes the rounded mean of the block's pixels.
    """
    if not isinstance(grid, TargetGrid):
        raise InvalidConfiguration("grid must be a TargetGrid")
    sampling = SamplingStrategy.parse(sampling)

    if sampling is SamplingStrategy.AVERAGE:
        small = _sample_average(source.pixels, grid)
    else:
        small = _sample_center(source.pixels, grid)
    return PixelBuffer(grid.blocks_wide, grid.blocks_high, small)


def upscale_blocks(small: PixelBuffer, output_width: int, output_height: int) -> PixelBuffer:
    """Stretch each pixel of ``small`` into a solid rectangle of the output.

    Every output pixel belongs to exactly one rectangle; rectangle sizes
    differ by at most one pixel when the output is not an exact multiple.
    """
    _check_size("output_width", output_width)
    _check_size("output_height", output_height)

    rows = _block_of_pixel(int(output_height), small.height)
    cols = _block_of_pixel(int(output_width), small.width)
    out = small.pixels[rows[:, None], cols[None, :], :]
    return PixelBuffer(int(output_width), int(output_height), out)


def pixelate(
    source: PixelBuffer,
    output_width: int,
    output_height: int,
    grid: TargetGrid,
    sampling: Union[SamplingStrategy, str] = SamplingStrategy.CENTER,
) -> PixelBuffer:
    """Render ``source`` as a grid of solid-color blocks.

    Parameters
    ----------
    source : PixelBuffer
        Image to pixelate. It is not modified.
    output_width, output_height : int
        Size of the returned image (>=1), independent of the grid size.
    grid : TargetGrid
        Number of visible "dots" across and down.
    sampling : SamplingStrategy | str
        Representative color choice per block; see :func:`downscale`.

    Returns
    -------
    PixelBuffer
        Image of exactly ``output_width x output_height`` pixels.
    """
    _check_size("output_width", output_width)
    _check_size("output_height", output_height)
    small = downscale(source, grid, sampling)
    return upscale_blocks(small, output_width, output_height)


__all__ = [
    "SamplingStrategy",
    "block_bounds",
    "downscale",
    "upscale_blocks",
    "pixelate",
]
