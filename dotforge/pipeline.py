"""Pipeline orchestration: quantize, outline, then pixelate.

:func:`run` is a pure function of a source buffer and a
:class:`Configuration`. :class:`Pipeline` holds one source image so that an
interactive caller can re-render it with different settings; every run
starts again from the untouched source.
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .buffer import PixelBuffer
from .errors import InvalidConfiguration, NoSourceImage
from .filters.outline import OutlineStrength, detect_and_composite
from .filters.quantize import QuantizationLevel, quantize
from .grid import TargetGrid, grid_for_long_side
from .utils.pixelate import SamplingStrategy, pixelate
from .utils.resize import fit_output_size


@dataclass(frozen=True)
class Configuration:
    """Settings for one pipeline run.

    Enumeration fields accept their enum members or CLI names (``"16"``,
    ``"unlimited"``, ``"strong"``, ...). Everything is checked on
    construction and :class:`InvalidConfiguration` is raised for unusable
    values, before any pixel work happens.
    """

    grid: TargetGrid
    output_width: int
    output_height: int
    quantization: QuantizationLevel = QuantizationLevel.UNLIMITED
    outline: OutlineStrength = OutlineStrength.NONE
    sampling: SamplingStrategy = SamplingStrategy.CENTER

    def __post_init__(self) -> None:
        if not isinstance(self.grid, TargetGrid):
            raise InvalidConfiguration("grid must be a TargetGrid")
        for name in ("output_width", "output_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
        object.__setattr__(self, "quantization", QuantizationLevel.parse(self.quantization))
        object.__setattr__(self, "outline", OutlineStrength.parse(self.outline))
        object.__setattr__(self, "sampling", SamplingStrategy.parse(self.sampling))

    @classmethod
    def for_image(
        cls,
        source: PixelBuffer,
        dots: int,
        max_width: Optional[int] = None,
        **kwargs,
    ) -> "Configuration":
        """Build a configuration with ``dots`` blocks along the long side.

        The output canvas is the source size, capped at ``max_width``.
        """
        grid = grid_for_long_side(source.width, source.height, dots)
        out_w, out_h = fit_output_size(source.width, source.height, max_width)
        return cls(grid=grid, output_width=out_w, output_height=out_h, **kwargs)

    def with_grid(self, grid: TargetGrid) -> "Configuration":
        return replace(self, grid=grid)


def run(source: PixelBuffer, config: Configuration) -> PixelBuffer:
    """Render ``source`` as pixel art.

    Parameters
    ----------
    source : PixelBuffer
        Decoded source image. It is never modified.
    config : Configuration
        Quantization, outline, grid and output size for this run.

    Returns
    -------
    PixelBuffer
        Fully populated RGBA image of ``config.output_width x
        config.output_height`` pixels.
    """
    if not isinstance(source, PixelBuffer):
        raise TypeError("source must be a PixelBuffer")
    if not isinstance(config, Configuration):
        raise TypeError("config must be a Configuration")

    work = source.copy()
    work = quantize(work, config.quantization)
    work = detect_and_composite(work, config.outline)
    return pixelate(work, config.output_width, config.output_height, config.grid, config.sampling)


class PipelineState(Enum):
    IDLE = "idle"
    READY = "ready"


class Pipeline:
    """Holds a source image and renders it on demand."""

    def __init__(self, source: Optional[PixelBuffer] = None) -> None:
        self._source: Optional[PixelBuffer] = None
        if source is not None:
            self.load(source)

    @property
    def state(self) -> PipelineState:
        return PipelineState.IDLE if self._source is None else PipelineState.READY

    @property
    def source(self) -> Optional[PixelBuffer]:
        return self._source

    def load(self, source: PixelBuffer) -> None:
        """Replace the source image; the pipeline becomes READY."""
        if not isinstance(source, PixelBuffer):
            raise TypeError("source must be a PixelBuffer")
        self._source = source

    def clear(self) -> None:
        self._source = None

    def run(self, config: Configuration) -> PixelBuffer:
        if self._source is None:
            raise NoSourceImage("Load an image before converting it")
        return run(self._source, config)


__all__ = ["Configuration", "Pipeline", "PipelineState", "run"]
