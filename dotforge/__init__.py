from __future__ import annotations

from .buffer import PixelBuffer  # noqa: F401
from .errors import (  # noqa: F401
    DimensionMismatch,
    DotforgeError,
    InvalidConfiguration,
    NoSourceImage,
)
from .filters import OutlineStrength, QuantizationLevel, detect_and_composite, quantize  # noqa: F401
from .grid import TargetGrid, grid_for_long_side, resize_grid  # noqa: F401
from .pipeline import Configuration, Pipeline, PipelineState, run  # noqa: F401
from .utils.loader import decode_image, encode_image, load_image, save_image  # noqa: F401
from .utils.pixelate import SamplingStrategy, pixelate  # noqa: F401
from .utils.resize import fit_output_size  # noqa: F401

__all__ = [
    "PixelBuffer",
    "DotforgeError",
    "InvalidConfiguration",
    "DimensionMismatch",
    "NoSourceImage",
    "QuantizationLevel",
    "quantize",
    "OutlineStrength",
    "detect_and_composite",
    "TargetGrid",
    "resize_grid",
    "grid_for_long_side",
    "SamplingStrategy",
    "pixelate",
    "fit_output_size",
    "Configuration",
    "Pipeline",
    "PipelineState",
    "run",
    "decode_image",
    "encode_image",
    "load_image",
    "save_image",
]
