"""RGBA pixel buffer shared by every pipeline stage.

A :class:`PixelBuffer` wraps a read-only NumPy ``uint8`` array of shape
(H, W, 4). Stages never mutate a buffer they receive; they build a new one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import DimensionMismatch

Array = np.ndarray

CHANNELS = 4


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Immutable RGBA raster.

    Parameters
    ----------
    width, height : int
        Declared raster size in pixels (>=1).
    pixels : np.ndarray | Sequence[int]
        Channel values, either shaped exactly (H, W, 4) or flat RGBA of length
        ``width * height * 4`` (the canvas ``ImageData`` layout). Values are
        copied, so later changes to the caller's array do not leak in.

    Raises
    ------
    DimensionMismatch
        If the array is not shaped (H, W, 4) or flat, or the pixel count does
        not equal ``width * height``.
    ValueError
        If a channel value falls outside [0, 255].
    """

    width: int
    height: int
    pixels: Array

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise DimensionMismatch(
                f"buffer dimensions must be positive, got {self.width}x{self.height}"
            )
        arr = np.asarray(self.pixels)
        expected = self.width * self.height * CHANNELS
        shape = (self.height, self.width, CHANNELS)
        if arr.ndim != 1 and arr.shape != shape:
            raise DimensionMismatch(
                f"{self.width}x{self.height} RGBA buffer needs shape {shape}, got {arr.shape}"
            )
        if arr.size != expected:
            raise DimensionMismatch(
                f"{self.width}x{self.height} RGBA buffer needs {expected} channel "
                f"values, got {arr.size}"
            )
        if arr.dtype != np.uint8:
            if not np.issubdtype(arr.dtype, np.integer):
                raise TypeError("pixels must hold integer channel values")
            if arr.min() < 0 or arr.max() > 255:
                raise ValueError("channel values must be within [0, 255]")
        data = np.array(arr, dtype=np.uint8).reshape(shape)
        data.flags.writeable = False
        object.__setattr__(self, "pixels", data)

    @classmethod
    def from_array(cls, arr: Array) -> "PixelBuffer":
        """Build a buffer from an (H, W, 4) or (H, W, 3) array.

        RGB input gets a fully opaque alpha channel.
        """
        if not isinstance(arr, np.ndarray) or arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError("arr must be an image with shape (H, W, 3) or (H, W, 4)")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=arr.dtype)
            arr = np.concatenate([arr, alpha], axis=2)
        h, w, _ = arr.shape
        return cls(w, h, arr)

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> "PixelBuffer":
        """Build a buffer where every pixel has the same RGBA value."""
        color = np.asarray(rgba, dtype=np.int64)
        if color.shape != (CHANNELS,):
            raise ValueError("rgba must have exactly 4 components")
        return cls(width, height, np.tile(color, (max(height, 0), max(width, 0), 1)))

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.pixels)

    def to_array(self) -> Array:
        """Return a writable (H, W, 4) copy of the pixel data."""
        return self.pixels.copy()

    def to_bytes(self) -> bytes:
        """Return the raw RGBA bytes in row-major order."""
        return self.pixels.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)


__all__ = ["PixelBuffer", "CHANNELS"]
