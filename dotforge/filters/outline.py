"""Sobel edge detection and black outline compositing.

The gradient kernel is compiled with Numba. The outermost 1-pixel ring of
the image is never evaluated and keeps a magnitude of zero, so outlines
never touch the image border.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Union

import numpy as np
from numba import njit

from ..buffer import PixelBuffer
from ..errors import InvalidConfiguration

Array = np.ndarray

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


class OutlineStrength(Enum):
    """How aggressively edges are outlined."""

    NONE = "none"
    WEAK = "weak"
    NORMAL = "normal"
    STRONG = "strong"

    @property
    def threshold(self) -> Optional[int]:
        """Gradient magnitude an edge pixel must exceed (lower is denser)."""
        return _THRESHOLDS.get(self)

    @classmethod
    def parse(cls, value: Union["OutlineStrength", str, None]) -> "OutlineStrength":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidConfiguration(f"Unknown outline strength: {value!r}")


_THRESHOLDS = {
    OutlineStrength.WEAK: 60,
    OutlineStrength.NORMAL: 40,
    OutlineStrength.STRONG: 20,
}


def luminance(buffer: PixelBuffer) -> Array:
    """Return the (H, W) float64 luma map ``0.299R + 0.587G + 0.114B``."""
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    return rgb[:, :, 0] * LUMA_WEIGHTS[0] + rgb[:, :, 1] * LUMA_WEIGHTS[1] + rgb[:, :, 2] * LUMA_WEIGHTS[2]


@njit(cache=True)
def _sobel_impl(gray: np.ndarray, out: np.ndarray) -> None:
    H, W = gray.shape
    for y in range(1, H - 1):
        for x in range(1, W - 1):
            # Gx = [-1 0 1; -2 0 2; -1 0 1]
            gx = (gray[y - 1, x + 1] + 2.0 * gray[y, x + 1] + gray[y + 1, x + 1]) - (
                gray[y - 1, x - 1] + 2.0 * gray[y, x - 1] + gray[y + 1, x - 1]
            )
            # Gy = [-1 -2 -1; 0 0 0; 1 2 1]
            gy = (gray[y + 1, x - 1] + 2.0 * gray[y + 1, x] + gray[y + 1, x + 1]) - (
                gray[y - 1, x - 1] + 2.0 * gray[y - 1, x] + gray[y - 1, x + 1]
            )
            out[y, x] = math.sqrt(gx * gx + gy * gy)


def gradient_magnitude(buffer: PixelBuffer) -> Array:
    """Compute the Sobel gradient magnitude of ``buffer``'s luminance.

    Returns
    -------
    np.ndarray
        (H, W) ``uint8`` map. Values are rounded to the nearest integer and
        saturate at 255; the border ring is always 0.
    """
    gray = luminance(buffer)
    mag = np.zeros_like(gray)
    _sobel_impl(gray, mag)
    return np.clip(np.rint(mag), 0, 255).astype(np.uint8)


def edge_mask(buffer: PixelBuffer, strength: Union[OutlineStrength, str]) -> Array:
    """Boolean (H, W) map of pixels whose magnitude exceeds the threshold."""
    strength = OutlineStrength.parse(strength)
    if strength is OutlineStrength.NONE:
        return np.zeros((buffer.height, buffer.width), dtype=bool)
    return gradient_magnitude(buffer) > strength.threshold


def detect_and_composite(buffer: PixelBuffer, strength: Union[OutlineStrength, str]) -> PixelBuffer:
    """Paint detected edges black onto a copy of ``buffer``.

    Edge pixels get RGB set to 0 with alpha unchanged; every other pixel is
    copied as is. ``OutlineStrength.NONE`` returns ``buffer`` itself.
    """
    strength = OutlineStrength.parse(strength)
    if strength is OutlineStrength.NONE:
        return buffer

    mask = edge_mask(buffer, strength)
    out = buffer.to_array()
    out[mask, :3] = 0
    return PixelBuffer(buffer.width, buffer.height, out)


__all__ = [
    "OutlineStrength",
    "luminance",
    "gradient_magnitude",
    "edge_mask",
    "detect_and_composite",
]
