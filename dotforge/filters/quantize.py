"""Uniform per-channel color quantization.

Each of R, G, B is rounded independently to ``levels`` evenly spaced values
across [0, 255]; alpha is left untouched. There is no palette search and no
dithering, so a level of L yields at most L^3 distinct colors.
"""
from __future__ import annotations

import numbers
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..buffer import PixelBuffer
from ..errors import InvalidConfiguration

Array = np.ndarray


class QuantizationLevel(Enum):
    """Number of levels kept per color channel."""

    L4 = 4
    L8 = 8
    L16 = 16
    L32 = 32
    L64 = 64
    UNLIMITED = "unlimited"

    @property
    def levels(self) -> Optional[int]:
        return None if self is QuantizationLevel.UNLIMITED else int(self.value)

    @property
    def factor(self) -> Optional[float]:
        """Step between adjacent levels, ``255 / (levels - 1)``."""
        if self.levels is None:
            return None
        return 255.0 / (self.levels - 1)

    @classmethod
    def parse(cls, value: Union["QuantizationLevel", int, str, None]) -> "QuantizationLevel":
        """Accept an enum member, a level count or a CLI name."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.UNLIMITED
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("unlimited", "none", "off"):
                return cls.UNLIMITED
            if key.isdigit():
                value = int(key)
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidConfiguration(f"Unknown quantization level: {value!r}")


def _round_half_up(x: Array) -> Array:
    # Inputs are non-negative, so this rounds halves away from zero.
    return np.floor(x + 0.5)


def quantize_channels(rgb: Array, levels: int) -> Array:
    """Quantize an array of channel values to ``levels`` steps.

    Returns a ``uint8`` array of the same shape.
    """
    factor = 255.0 / (levels - 1)
    stepped = _round_half_up(rgb.astype(np.float64) / factor) * factor
    return np.clip(_round_half_up(stepped), 0, 255).astype(np.uint8)


def quantize(buffer: PixelBuffer, level: Union[QuantizationLevel, int, str]) -> PixelBuffer:
    """Reduce each RGB channel of ``buffer`` to the given number of levels.

    Parameters
    ----------
    buffer : PixelBuffer
        Source image. It is not modified.
    level : QuantizationLevel | int | str
        Levels per channel. ``UNLIMITED`` returns ``buffer`` unchanged.

    Returns
    -------
    PixelBuffer
        Quantized image of the same size.
    """
    level = QuantizationLevel.parse(level)
    if level is QuantizationLevel.UNLIMITED:
        return buffer

    out = buffer.to_array()
    out[:, :, :3] = quantize_channels(out[:, :, :3], level.levels)
    return PixelBuffer(buffer.width, buffer.height, out)


__all__ = ["QuantizationLevel", "quantize", "quantize_channels"]
